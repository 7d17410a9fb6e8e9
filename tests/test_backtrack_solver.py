from __future__ import annotations

from board import Grid, apply_entry
from events import EventRecorder
from solver import BacktrackSolver, Decision, SearchState, SolveOutcome, solve


def _two_dead_ends() -> Grid:
    rows = [[0] * 9 for _ in range(9)]
    rows[0][:7] = [1, 2, 3, 4, 5, 6, 7]
    rows[4][8] = 8
    rows[5][8] = 9
    return Grid(rows)


def test_solves_classic_puzzle_in_place(puzzle_rows, solution_text) -> None:
    grid = Grid(puzzle_rows)
    solver = BacktrackSolver(grid)
    result = solver.solve()

    assert result.outcome is SolveOutcome.SOLVED
    assert result.solved
    assert result.grid is grid
    assert grid.to_string() == solution_text
    assert grid.is_complete()
    assert solver.depth == 51
    assert solver.decisions()[0] == Decision(0, 2, 4)
    assert result.stats.placements - result.stats.backtracks == 51


def test_givens_survive_solve(puzzle_rows) -> None:
    grid = Grid(puzzle_rows)
    solve(grid)
    for r in range(9):
        for c in range(9):
            if puzzle_rows[r][c]:
                assert grid.get(r, c) == puzzle_rows[r][c]


def test_dead_end_without_placements(dead_end_rows) -> None:
    grid = Grid(dead_end_rows)
    recorder = EventRecorder()
    grid.subscribe(recorder)

    result = solve(grid)

    assert result.outcome is SolveOutcome.UNSOLVABLE
    assert result.stats.steps == 2
    assert result.stats.placements == 0
    assert result.stats.candidates_tried == 9
    assert len(recorder) == 18
    assert grid.rows() == Grid(dead_end_rows).rows()


def test_step_machine_backtracks_and_resumes() -> None:
    grid = _two_dead_ends()
    solver = BacktrackSolver(grid)
    assert solver.cursor == (0, 7)

    assert solver.step() is SearchState.ADVANCING
    assert solver.decisions() == (Decision(0, 7, 8),)
    assert solver.cursor == (0, 8)

    assert solver.step() is SearchState.RETREATING
    assert solver.step() is SearchState.ADVANCING
    assert solver.depth == 0
    assert solver.cursor == (0, 7)
    assert solver.resume_digit == 9
    assert grid.get(0, 7) == 0

    result = solver.solve()
    assert result.outcome is SolveOutcome.UNSOLVABLE
    assert result.stats.to_payload() == {
        "steps": 7,
        "placements": 2,
        "backtracks": 2,
        "candidates_tried": 27,
        "max_depth": 1,
    }
    assert grid.get(0, 7) == 0 and grid.get(0, 8) == 0


def test_illegal_start_is_rejected_without_events() -> None:
    rows = [[0] * 9 for _ in range(9)]
    rows[3][1] = 6
    rows[3][7] = 6
    grid = Grid(rows)
    recorder = EventRecorder()
    grid.subscribe(recorder)

    result = solve(grid)

    assert result.outcome is SolveOutcome.UNSOLVABLE
    assert result.stats.steps == 0
    assert len(recorder) == 0


def test_complete_grid_solves_immediately(solution_rows) -> None:
    grid = Grid(solution_rows)
    recorder = EventRecorder()
    grid.subscribe(recorder)
    solver = BacktrackSolver(grid)

    result = solver.solve()

    assert result.outcome is SolveOutcome.SOLVED
    assert result.stats.steps == 1
    assert solver.decisions() == ()
    assert len(recorder) == 0


def test_terminal_state_is_sticky(solution_rows) -> None:
    solver = BacktrackSolver(Grid(solution_rows))
    assert solver.step() is SearchState.SOLVED
    assert solver.step() is SearchState.SOLVED
    assert solver.stats.steps == 1


def test_should_stop_cancels_with_legal_partial_grid(puzzle_rows) -> None:
    grid = Grid(puzzle_rows)
    calls = {"n": 0}

    def _stop() -> bool:
        calls["n"] += 1
        return calls["n"] > 40

    result = solve(grid, should_stop=_stop)

    assert result.outcome is SolveOutcome.CANCELLED
    assert result.reason == "stopped"
    assert result.stats.steps == 40
    assert grid.is_legal()
    assert not grid.is_complete()


def test_event_stream_is_deterministic(puzzle_rows) -> None:
    streams = []
    for _ in range(2):
        grid = Grid(puzzle_rows)
        recorder = EventRecorder()
        grid.subscribe(recorder)
        solve(grid)
        streams.append(recorder.snapshot())
    assert streams[0] == streams[1]
    assert len(streams[0]) > 0


def test_digits_left_in_free_cells_are_cleared_before_search(puzzle_rows, solution_text) -> None:
    grid = Grid(puzzle_rows)
    assert apply_entry(grid, 8, 6, 3).legal

    result = solve(grid)

    assert result.outcome is SolveOutcome.SOLVED
    assert grid.to_string() == solution_text


def test_unsolvable_search_leaves_free_cells_empty(dead_end_rows) -> None:
    grid = Grid(dead_end_rows)
    grid.set(8, 8, 5)

    result = solve(grid)

    assert result.outcome is SolveOutcome.UNSOLVABLE
    assert all(grid.get(r, c) == 0 for r, c in grid.free_cells())
