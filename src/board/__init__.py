"""Sudoku grid model: storage, given mask and uniqueness checks."""

from __future__ import annotations

from .entry import EntryVerdict, apply_entry
from .errors import GridContractError, GridValidationError
from .model import BLOCK_SIZE, BOARD_SIZE, EMPTY, Grid, Rows, block_origin

__all__ = [
    "BLOCK_SIZE",
    "BOARD_SIZE",
    "EMPTY",
    "EntryVerdict",
    "Grid",
    "GridContractError",
    "GridValidationError",
    "Rows",
    "apply_entry",
    "block_origin",
]
