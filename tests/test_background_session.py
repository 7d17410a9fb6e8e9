from __future__ import annotations

import threading

import pytest

from board import Grid
from session import SolveInProgressError, SolveSession


def test_background_solve_matches_foreground(puzzle_rows, solution_text) -> None:
    done = []
    session = SolveSession(Grid(puzzle_rows), trace=False, on_done=done.append).start()
    payload, result = session.wait(timeout=60)
    assert not session.running
    assert payload["outcome"] == "solved"
    assert result.grid.to_string() == solution_text
    assert done and done[0][0] is payload


def test_cancel_from_sink_stops_search() -> None:
    grid = Grid.empty()
    holder = {}

    def _cancel_on_first(event) -> None:
        holder["session"].cancel()

    session = SolveSession(grid, sinks=[_cancel_on_first], trace=False, timeout_ms=0)
    holder["session"] = session
    session.start()
    payload, result = session.wait(timeout=30)

    assert payload["outcome"] == "cancelled"
    assert payload["reason"] == "stopped"
    assert session.cancelled
    assert grid.is_legal()
    assert result.stats.steps == 1


def test_second_search_on_same_grid_is_refused() -> None:
    grid = Grid.empty()
    gate = threading.Event()
    first = SolveSession(grid, sinks=[lambda event: gate.wait(10)], trace=False)
    first.start()
    try:
        with pytest.raises(SolveInProgressError):
            SolveSession(grid, trace=False).start()
        with pytest.raises(SolveInProgressError):
            first.start()
    finally:
        first.cancel()
        gate.set()
    first.wait(timeout=30)

    payload, _ = SolveSession(grid, trace=False).start().wait(timeout=60)
    assert payload["outcome"] == "solved"


def test_worker_errors_are_reraised() -> None:
    def _boom(event) -> None:
        raise RuntimeError("sink failed")

    session = SolveSession(Grid.empty(), sinks=[_boom], trace=False).start()
    with pytest.raises(RuntimeError, match="sink failed"):
        session.wait(timeout=30)


def test_wait_before_start() -> None:
    with pytest.raises(RuntimeError):
        SolveSession(Grid.empty()).wait()
