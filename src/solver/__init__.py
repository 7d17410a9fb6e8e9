"""Explicit-stack backtracking search over a :class:`board.model.Grid`."""

from __future__ import annotations

from .backtrack import (
    BacktrackSolver,
    Decision,
    SearchState,
    SolveOutcome,
    SolveResult,
    SolveStats,
    StopCheck,
    solve,
)

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
