"""Command line entry point: solve or check a puzzle file."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List

from board.errors import GridValidationError
from board.model import Grid
from contracts.errors import ManagedValidationError
from contracts.validator import assert_valid
from ports.printer_port import export
from ports.solver_port import solve_grid
from printer.text import render_grid
from puzzle_io.text_loader import FORMATS, PuzzleFormatError, load_puzzle
from session.background import SolveSession

_LOGGER = logging.getLogger(__name__)

EXIT_CODES = {"solved": 0, "unsolvable": 2, "cancelled": 3}
EXIT_BAD_INPUT = 4


def _load_grid(args: argparse.Namespace) -> Grid:
    rows = load_puzzle(args.path, fmt=args.format, blank=args.blank)
    return Grid(rows)


def _solve_kwargs(args: argparse.Namespace) -> Dict[str, Any]:
    trace = True if (args.trace or args.trace_dir) else None
    return {"timeout_ms": args.timeout_ms, "trace": trace, "trace_dir": args.trace_dir}


def _run_background(grid: Grid, kwargs: Dict[str, Any]):
    session = SolveSession(grid, **kwargs).start()
    try:
        outcome = session.wait()
    except KeyboardInterrupt:
        _LOGGER.warning("interrupted, cancelling search")
        session.cancel()
        outcome = session.wait()
    return outcome


def cmd_solve(args: argparse.Namespace) -> int:
    try:
        grid = _load_grid(args)
    except (PuzzleFormatError, GridValidationError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_BAD_INPUT

    puzzle_rows = grid.rows()
    kwargs = _solve_kwargs(args)
    if args.background:
        payload, _ = _run_background(grid, kwargs)
    else:
        payload, _ = solve_grid(grid, **kwargs)
    assert_valid(payload, "SolveReport")

    if args.json:
        print(json.dumps(payload, indent=2, sort_keys=True))
    else:
        print(render_grid(puzzle_rows))
        print()
        if payload["outcome"] == "solved":
            print(render_grid(grid.rows()))
        else:
            reason = f" ({payload['reason']})" if payload.get("reason") else ""
            print(f"{payload['outcome']}{reason}")
        stats = payload["stats"]
        print(
            f"steps={stats['steps']} placements={stats['placements']} "
            f"backtracks={stats['backtracks']} events={payload['events']} time_ms={payload['time_ms']}"
        )

    if args.pdf:
        export(payload, args.pdf, fmt="pdf")
    if args.text_out:
        export(payload, args.text_out, fmt="text")
    return EXIT_CODES[payload["outcome"]]


def cmd_check(args: argparse.Namespace) -> int:
    try:
        grid = _load_grid(args)
    except (PuzzleFormatError, GridValidationError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_BAD_INPUT

    conflicts = grid.conflicts()
    summary = {
        "legal": not conflicts,
        "complete": grid.is_complete(),
        "conflicts": conflicts,
        "free_cells": len(list(grid.free_cells())),
    }
    print(json.dumps(summary, indent=2, sort_keys=True))
    return 0 if not conflicts else 1


def _add_input_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("path", help="Puzzle file (csv, compact or json)")
    parser.add_argument("--format", choices=FORMATS, default="auto")
    parser.add_argument("--blank", default=None, help="Blank marker for csv input")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Backtracking Sudoku solver")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    solve = sub.add_parser("solve", help="Solve a puzzle and print the result")
    _add_input_args(solve)
    solve.add_argument("--json", action="store_true", help="Print the SolveReport payload")
    solve.add_argument(
        "--timeout-ms",
        type=int,
        default=None,
        help="Abort the search after this many milliseconds (0 disables)",
    )
    solve.add_argument("--trace", action="store_true", help="Write change events to the JSONL trace")
    solve.add_argument("--trace-dir", default=None)
    solve.add_argument("--pdf", default=None, help="Export puzzle and solution to this PDF")
    solve.add_argument("--text-out", default=None, help="Export puzzle and solution as text")
    solve.add_argument(
        "--background",
        action="store_true",
        help="Run the search on a worker thread; Ctrl-C cancels it",
    )
    solve.set_defaults(func=cmd_solve)

    check = sub.add_parser("check", help="Report row, column and block conflicts")
    _add_input_args(check)
    check.set_defaults(func=cmd_check)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except ManagedValidationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_BAD_INPUT


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
