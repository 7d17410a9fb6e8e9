"""Headless handler for a single user edit on a free cell."""

from __future__ import annotations

from dataclasses import dataclass

from .model import Grid


@dataclass(frozen=True)
class EntryVerdict:
    """Outcome of :func:`apply_entry`.

    ``legal`` is False when the new digit duplicates another digit in its row,
    column or block; a presentation layer would colour the cell red.
    ``complete`` turns True once the edit finishes the puzzle.
    """

    row: int
    col: int
    digit: int
    legal: bool
    complete: bool


def apply_entry(grid: Grid, row: int, col: int, digit: int) -> EntryVerdict:
    """Write ``digit`` into a free cell and report whether the board stays legal.

    The write is kept even when illegal, matching an interactive board where
    the player sees the conflict and corrects it.
    """

    grid.set(row, col, digit)
    legal = grid.cell_valid(row, col)
    return EntryVerdict(row=row, col=col, digit=digit, legal=legal, complete=legal and grid.is_complete())


__all__ = ["EntryVerdict", "apply_entry"]
