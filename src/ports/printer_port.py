"""Facade writing a ``SolveReport`` payload to a text or PDF file."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping

from printer.pdf import export_pdf
from printer.text import render_grid
from puzzle_io.text_loader import parse_compact

_LOGGER = logging.getLogger(__name__)

EXPORT_FORMATS = ("text", "pdf")


def _grids(report: Mapping[str, Any]) -> tuple[List[List[int]], List[List[int]] | None]:
    puzzle = parse_compact(str(report["puzzle"]))
    if report.get("outcome") != "solved":
        return puzzle, None
    return puzzle, parse_compact(str(report["grid"]))


def export(report: Mapping[str, Any], out_path: str | Path, fmt: str = "pdf") -> Dict[str, Any]:
    """Write ``report`` to ``out_path`` and return a small manifest."""

    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {fmt!r}")
    puzzle, solution = _grids(report)
    target = Path(out_path)
    footer = f"{report.get('outcome', 'unknown')} | {report.get('events', 0)} events"

    if fmt == "pdf":
        export_pdf(puzzle, solution, target, footer=footer)
    else:
        target.parent.mkdir(parents=True, exist_ok=True)
        parts = [render_grid(puzzle)]
        if solution is not None:
            parts.append(render_grid(solution))
        parts.append(footer)
        target.write_text("\n\n".join(parts) + "\n", encoding="utf-8")

    _LOGGER.info("exported %s report to %s", fmt, target)
    return {"format": fmt, "path": str(target), "has_solution": solution is not None}


__all__ = ["EXPORT_FORMATS", "export"]
