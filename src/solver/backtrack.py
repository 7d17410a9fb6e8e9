"""Depth-first Sudoku search with an explicit decision stack.

The solver walks the free cells of a :class:`~board.model.Grid` in row-major
order.  Each placement that keeps its row, column and block duplicate-free is
pushed as a :class:`Decision`; when a cell runs out of candidates the most
recent decision is popped and retried from ``digit + 1``.  No recursion is
involved, so the stack length is always equal to the cursor position.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Tuple

from board.model import EMPTY, Grid

_LOGGER = logging.getLogger(__name__)

MIN_DIGIT = 1
MAX_DIGIT = 9

StopCheck = Callable[[], bool]


class SearchState(str, Enum):
    """Search phases; ``SOLVED`` and ``UNSOLVABLE`` are terminal."""

    ADVANCING = "advancing"
    RETREATING = "retreating"
    SOLVED = "solved"
    UNSOLVABLE = "unsolvable"

    @property
    def terminal(self) -> bool:
        return self in (SearchState.SOLVED, SearchState.UNSOLVABLE)


class SolveOutcome(str, Enum):
    """Result reported to callers of :meth:`BacktrackSolver.solve`."""

    SOLVED = "solved"
    UNSOLVABLE = "unsolvable"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Decision:
    """One retractable hypothesis: ``digit`` placed at a free cell."""

    row: int
    col: int
    digit: int


@dataclass
class SolveStats:
    steps: int = 0
    placements: int = 0
    backtracks: int = 0
    candidates_tried: int = 0
    max_depth: int = 0

    def to_payload(self) -> dict:
        return {
            "steps": self.steps,
            "placements": self.placements,
            "backtracks": self.backtracks,
            "candidates_tried": self.candidates_tried,
            "max_depth": self.max_depth,
        }


@dataclass(frozen=True)
class SolveResult:
    """Terminal outcome of a search.

    ``grid`` is the same object the solver was given, mutated in place.  For
    ``UNSOLVABLE`` every free cell is back to 0; for ``CANCELLED`` the grid
    holds whatever legal partial assignment the search had reached.
    """

    outcome: SolveOutcome
    grid: Grid
    stats: SolveStats
    reason: Optional[str] = None

    @property
    def solved(self) -> bool:
        return self.outcome is SolveOutcome.SOLVED


@dataclass
class _Frame:
    cursor: int = 0
    resume: int = MIN_DIGIT
    stack: List[Decision] = field(default_factory=list)


class BacktrackSolver:
    """Single-use search over one grid.

    Parameters
    ----------
    grid:
        Board to solve in place.  Givens are never written; the solver only
        touches cells reported by :meth:`Grid.free_cells`.  Free cells that
        already hold a digit are cleared before the search starts.

    Notes
    -----
    The instance owns the decision stack for the lifetime of one search and
    must not be shared between threads.  Use :meth:`step` to drive the state
    machine one transition at a time, or :meth:`solve` to run to completion.
    """

    def __init__(self, grid: Grid) -> None:
        self.grid = grid
        self._free: Tuple[Tuple[int, int], ...] = tuple(grid.free_cells())
        self._frame = _Frame()
        self.stats = SolveStats()
        grid.reset()
        if not grid.is_legal():
            _LOGGER.debug("starting grid violates uniqueness: %s", grid.conflicts())
            self.state = SearchState.UNSOLVABLE
        else:
            self.state = SearchState.ADVANCING

    # Introspection -------------------------------------------------------

    @property
    def cursor(self) -> Optional[Tuple[int, int]]:
        """Free cell under consideration, ``None`` once past the last one."""

        index = self._frame.cursor
        if index >= len(self._free):
            return None
        return self._free[index]

    @property
    def resume_digit(self) -> int:
        return self._frame.resume

    @property
    def depth(self) -> int:
        return len(self._frame.stack)

    def decisions(self) -> Tuple[Decision, ...]:
        return tuple(self._frame.stack)

    # State machine -------------------------------------------------------

    def step(self) -> SearchState:
        """Perform one transition and return the resulting state."""

        if self.state.terminal:
            return self.state
        self.stats.steps += 1
        if self.state is SearchState.ADVANCING:
            self.state = self._advance()
        else:
            self.state = self._retreat()
        return self.state

    def _advance(self) -> SearchState:
        frame = self._frame
        if frame.cursor >= len(self._free):
            return SearchState.SOLVED

        row, col = self._free[frame.cursor]
        grid = self.grid
        for digit in range(frame.resume, MAX_DIGIT + 1):
            self.stats.candidates_tried += 1
            grid.set(row, col, digit)
            if grid.row_valid(row) and grid.col_valid(col) and grid.block_valid(row, col):
                frame.stack.append(Decision(row, col, digit))
                frame.cursor += 1
                frame.resume = MIN_DIGIT
                self.stats.placements += 1
                self.stats.max_depth = max(self.stats.max_depth, len(frame.stack))
                return SearchState.ADVANCING
            grid.set(row, col, EMPTY)
        return SearchState.RETREATING

    def _retreat(self) -> SearchState:
        frame = self._frame
        if not frame.stack:
            return SearchState.UNSOLVABLE

        decision = frame.stack.pop()
        self.stats.backtracks += 1
        self.grid.set(decision.row, decision.col, EMPTY)
        frame.cursor = len(frame.stack)
        frame.resume = decision.digit + 1
        if frame.resume > MAX_DIGIT:
            return SearchState.RETREATING
        return SearchState.ADVANCING

    # Driver --------------------------------------------------------------

    def solve(self, *, should_stop: StopCheck | None = None) -> SolveResult:
        """Run until a terminal state, or until ``should_stop`` returns True.

        ``should_stop`` is consulted before every transition; it is the hook a
        background runner uses for cooperative cancellation and deadlines.
        """

        _LOGGER.debug("search started: %d free cells", len(self._free))
        while not self.state.terminal:
            if should_stop is not None and should_stop():
                _LOGGER.info(
                    "search cancelled after %d steps at depth %d", self.stats.steps, self.depth
                )
                return SolveResult(SolveOutcome.CANCELLED, self.grid, self.stats, reason="stopped")
            self.step()

        outcome = SolveOutcome.SOLVED if self.state is SearchState.SOLVED else SolveOutcome.UNSOLVABLE
        _LOGGER.debug(
            "search finished: %s (steps=%d placements=%d backtracks=%d)",
            outcome.value,
            self.stats.steps,
            self.stats.placements,
            self.stats.backtracks,
        )
        return SolveResult(outcome, self.grid, self.stats)


def solve(grid: Grid, *, should_stop: StopCheck | None = None) -> SolveResult:
    """Convenience wrapper: build a :class:`BacktrackSolver` and run it."""

    return BacktrackSolver(grid).solve(should_stop=should_stop)


__all__ = [
    "BacktrackSolver",
    "Decision",
    "SearchState",
    "SolveOutcome",
    "SolveResult",
    "SolveStats",
    "StopCheck",
    "solve",
]
