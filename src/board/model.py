"""Mutable 9x9 Sudoku grid with uniqueness checks and change notifications."""

from __future__ import annotations

from typing import Iterator, List, Sequence, Tuple

from events.sink import ChangeEvent, ChangeSink

from .errors import GridContractError, GridValidationError

BOARD_SIZE = 9
BLOCK_SIZE = 3
EMPTY = 0

Rows = Tuple[Tuple[int, ...], ...]


def _is_digit(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 9


def _unit_ok(values: Sequence[int]) -> bool:
    seen = set()
    for value in values:
        if value == EMPTY:
            continue
        if value in seen:
            return False
        seen.add(value)
    return True


def block_origin(row: int, col: int) -> Tuple[int, int]:
    """Top-left cell of the 3x3 block containing ``(row, col)``."""

    return (row // BLOCK_SIZE) * BLOCK_SIZE, (col // BLOCK_SIZE) * BLOCK_SIZE


class Grid:
    """The puzzle board.

    Cells hold 0 (empty) or a digit 1..9.  Cells that are nonzero at
    construction time are *givens*; the mask is computed once and every later
    :meth:`set` on a given raises :class:`GridContractError`.

    Writes never check legality.  Callers pair :meth:`set` with
    :meth:`row_valid`, :meth:`col_valid` and :meth:`block_valid` when they need
    to, which is what the solver does on every tentative placement.
    """

    def __init__(self, rows: Sequence[Sequence[int]]) -> None:
        if len(rows) != BOARD_SIZE:
            raise GridValidationError(f"grid must have {BOARD_SIZE} rows, got {len(rows)}")
        cells: List[List[int]] = []
        for r, row in enumerate(rows):
            if len(row) != BOARD_SIZE:
                raise GridValidationError(
                    f"row {r} must have {BOARD_SIZE} cells, got {len(row)}"
                )
            for c, value in enumerate(row):
                if not _is_digit(value):
                    raise GridValidationError(
                        f"cell ({r}, {c}) must hold an integer in [0, 9], got {value!r}"
                    )
            cells.append(list(row))
        self._cells = cells
        self._givens: Tuple[Tuple[bool, ...], ...] = tuple(
            tuple(value != EMPTY for value in row) for row in cells
        )
        self._sinks: List[ChangeSink] = []

    @classmethod
    def empty(cls) -> "Grid":
        return cls([[EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)])

    # Observers -----------------------------------------------------------

    def subscribe(self, sink: ChangeSink):
        """Register ``sink`` for every subsequent write; returns an unsubscribe callable."""

        self._sinks.append(sink)

        def _unsubscribe() -> None:
            self._sinks[:] = [other for other in self._sinks if other is not sink]

        return _unsubscribe

    def _notify(self, row: int, col: int, digit: int) -> None:
        if not self._sinks:
            return
        event = ChangeEvent(row, col, digit)
        for sink in tuple(self._sinks):
            sink(event)

    # Accessors -----------------------------------------------------------

    def _check_cell(self, row: object, col: object) -> None:
        for name, index in (("row", row), ("col", col)):
            if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < BOARD_SIZE:
                raise GridContractError(
                    f"{name} index must be in [0, {BOARD_SIZE - 1}], got {index!r}",
                    row=row if isinstance(row, int) else None,
                    col=col if isinstance(col, int) else None,
                )

    def get(self, row: int, col: int) -> int:
        self._check_cell(row, col)
        return self._cells[row][col]

    def set(self, row: int, col: int, digit: int) -> None:
        """Overwrite a free cell and notify subscribers with the new value."""

        self._check_cell(row, col)
        if not _is_digit(digit):
            raise GridValidationError(f"digit must be an integer in [0, 9], got {digit!r}")
        if self._givens[row][col]:
            raise GridContractError(f"cell ({row}, {col}) is a given", row=row, col=col)
        self._cells[row][col] = digit
        self._notify(row, col, digit)

    def is_given(self, row: int, col: int) -> bool:
        self._check_cell(row, col)
        return self._givens[row][col]

    # Uniqueness checks ---------------------------------------------------

    def row_valid(self, row: int) -> bool:
        self._check_cell(row, 0)
        return _unit_ok(self._cells[row])

    def col_valid(self, col: int) -> bool:
        self._check_cell(0, col)
        return _unit_ok([self._cells[r][col] for r in range(BOARD_SIZE)])

    def block_valid(self, row: int, col: int) -> bool:
        self._check_cell(row, col)
        r0, c0 = block_origin(row, col)
        return _unit_ok(
            [self._cells[r][c] for r in range(r0, r0 + BLOCK_SIZE) for c in range(c0, c0 + BLOCK_SIZE)]
        )

    def cell_valid(self, row: int, col: int) -> bool:
        """Row, column and block of ``(row, col)`` are all duplicate-free."""

        return self.row_valid(row) and self.col_valid(col) and self.block_valid(row, col)

    def is_legal(self) -> bool:
        for index in range(BOARD_SIZE):
            if not self.row_valid(index):
                return False
        for index in range(BOARD_SIZE):
            if not self.col_valid(index):
                return False
        for r0 in range(0, BOARD_SIZE, BLOCK_SIZE):
            for c0 in range(0, BOARD_SIZE, BLOCK_SIZE):
                if not self.block_valid(r0, c0):
                    return False
        return True

    def is_complete(self) -> bool:
        if any(value == EMPTY for row in self._cells for value in row):
            return False
        return self.is_legal()

    def conflicts(self) -> List[str]:
        """Names of the units holding duplicates, e.g. ``["r1", "c4", "b2"]`` (1-based)."""

        bad: List[str] = []
        for index in range(BOARD_SIZE):
            if not self.row_valid(index):
                bad.append(f"r{index + 1}")
        for index in range(BOARD_SIZE):
            if not self.col_valid(index):
                bad.append(f"c{index + 1}")
        for block in range(BOARD_SIZE):
            r0, c0 = (block // BLOCK_SIZE) * BLOCK_SIZE, (block % BLOCK_SIZE) * BLOCK_SIZE
            if not self.block_valid(r0, c0):
                bad.append(f"b{block + 1}")
        return bad

    # Views ---------------------------------------------------------------

    def free_cells(self) -> Iterator[Tuple[int, int]]:
        """Non-given cells in row-major order."""

        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                if not self._givens[r][c]:
                    yield r, c

    def rows(self) -> Rows:
        return tuple(tuple(row) for row in self._cells)

    def givens(self) -> Tuple[Tuple[bool, ...], ...]:
        return self._givens

    def to_string(self) -> str:
        return "".join(str(value) for row in self._cells for value in row)

    def reset(self) -> None:
        """Clear every nonempty free cell, emitting an event per cleared cell."""

        for r, c in self.free_cells():
            if self._cells[r][c] != EMPTY:
                self.set(r, c, EMPTY)

    def __repr__(self) -> str:
        filled = sum(1 for row in self._cells for value in row if value != EMPTY)
        givens = sum(1 for row in self._givens for flag in row if flag)
        return f"Grid(givens={givens}, filled={filled})"


__all__ = ["BLOCK_SIZE", "BOARD_SIZE", "EMPTY", "Grid", "Rows", "block_origin"]
