#!/usr/bin/env python3
"""Smoke-test deterministic behaviour of the solver: same input, same events."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from contracts import validator
from ports.solver_port import solve_rows
from puzzle_io import load_puzzle, parse_compact

_DEFAULT_PUZZLE = (
    "530070000600195000098000060800060003400803001"
    "700020006060000280000419005000080079"
)


def _run(rows) -> dict:
    payload, _ = solve_rows(rows, trace=False, timeout_ms=0)
    validator.assert_valid(payload, "SolveReport")
    return payload


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("path", nargs="?", default=None, help="Puzzle file; a classic puzzle by default")
    parser.add_argument("--runs", type=int, default=3)
    args = parser.parse_args(argv)

    rows = load_puzzle(args.path) if args.path else parse_compact(_DEFAULT_PUZZLE)
    first = _run(rows)
    for index in range(1, args.runs):
        other = _run(rows)
        for key in ("outcome", "grid", "events", "events_digest", "stats"):
            if first[key] != other[key]:
                print(f"determinism failed for {key} on run {index + 1}: {first[key]} vs {other[key]}")
                return 1

    print(f"Determinism smoke-test passed: {first['outcome']} with {first['events']} events ({first['events_digest']}).")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
