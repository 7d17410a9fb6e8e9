"""Error types raised by the grid model."""

from __future__ import annotations


class GridValidationError(ValueError):
    """Raised when grid data or a written digit falls outside the 9x9 / 0..9 domain."""


class GridContractError(AssertionError):
    """Raised when a caller breaks the grid's mutation contract.

    Writing to a given cell and addressing a cell outside the board are
    programming errors rather than bad input, so they fail loudly.
    """

    def __init__(self, message: str, *, row: int | None = None, col: int | None = None) -> None:
        super().__init__(message)
        self.row = row
        self.col = col


__all__ = ["GridContractError", "GridValidationError"]
