"""Plain text rendering of a board."""

from __future__ import annotations

from typing import List, Sequence

_RULE = "+-------+-------+-------+"


def render_grid(rows: Sequence[Sequence[int]], blank: str = ".") -> str:
    lines: List[str] = []
    for r, row in enumerate(rows):
        if r % 3 == 0:
            lines.append(_RULE)
        cells: List[str] = []
        for c, value in enumerate(row):
            cells.append(str(value) if value else blank)
            if c % 3 == 2 and c != len(row) - 1:
                cells.append("|")
        lines.append("| " + " ".join(cells) + " |")
    lines.append(_RULE)
    return "\n".join(lines)


__all__ = ["render_grid"]
