"""Facade running the backtracking solver and producing a ``SolveReport`` payload."""

from __future__ import annotations

import hashlib
import logging
import os
import time
from typing import Any, Dict, Iterable, Mapping, Sequence, Tuple

from board.model import Grid
from contracts.jsoncanon import jcs_dump
from events import log as trace_log
from events.sink import ChangeEvent, ChangeSink
from project_config import get_setting
from solver.backtrack import BacktrackSolver, SolveResult, StopCheck

_LOGGER = logging.getLogger(__name__)


def _merge_env(overrides: Mapping[str, str] | None = None) -> Dict[str, str]:
    env: Dict[str, str] = {str(k): str(v) for k, v in os.environ.items()}
    if overrides:
        env.update({str(k): str(v) for k, v in overrides.items()})
    return env


class _DigestSink:
    """Folds the event stream into a running sha256 and a count."""

    def __init__(self) -> None:
        self._hash = hashlib.sha256()
        self.count = 0

    def __call__(self, event: ChangeEvent) -> None:
        self._hash.update(jcs_dump(event.to_payload()))
        self._hash.update(b"\n")
        self.count += 1

    def hexdigest(self) -> str:
        return f"sha256-{self._hash.hexdigest()}"


def _deadline_check(timeout_ms: int, should_stop: StopCheck | None) -> StopCheck | None:
    if timeout_ms <= 0:
        return should_stop
    deadline = time.monotonic() + timeout_ms / 1000.0

    def _check() -> bool:
        if should_stop is not None and should_stop():
            return True
        return time.monotonic() >= deadline

    return _check


def resolve_settings(
    *,
    timeout_ms: int | None = None,
    trace: bool | None = None,
    trace_dir: str | None = None,
    env: Mapping[str, str] | None = None,
) -> Dict[str, Any]:
    """Apply CLI > environment > ``config.toml`` precedence to solver settings."""

    env_map = _merge_env(env)
    resolved_timeout = get_setting("LIMITS.solver_timeout_ms", 0, env_map) if timeout_ms is None else timeout_ms
    resolved_trace = get_setting("trace.enabled", False, env_map) if trace is None else trace
    resolved_dir = get_setting("trace.log_dir", "logs/trace", env_map) if trace_dir is None else trace_dir
    return {
        "timeout_ms": max(0, int(resolved_timeout or 0)),
        "trace": bool(resolved_trace),
        "trace_dir": str(resolved_dir),
        "trace_max_bytes": int(get_setting("trace.max_bytes", 0, env_map) or 0) or None,
    }


def solve_grid(
    grid: Grid,
    *,
    sinks: Iterable[ChangeSink] = (),
    timeout_ms: int | None = None,
    trace: bool | None = None,
    trace_dir: str | None = None,
    should_stop: StopCheck | None = None,
    env: Mapping[str, str] | None = None,
) -> Tuple[Dict[str, Any], SolveResult]:
    """Solve ``grid`` in place and return ``(report_payload, result)``.

    Parameters
    ----------
    grid:
        Board to solve; sinks are attached for the duration of the call only.
    sinks:
        Extra change sinks, e.g. a live renderer or an :class:`EventRecorder`.
    timeout_ms:
        Wall clock budget; ``0`` disables it.  Defaults to
        ``LIMITS.solver_timeout_ms`` with ``SUDOKU_SOLVER_TIMEOUT_MS`` override.
    trace, trace_dir:
        Write every change event to the JSONL trace log.
    should_stop:
        External cooperative cancellation hook.
    """

    settings = resolve_settings(timeout_ms=timeout_ms, trace=trace, trace_dir=trace_dir, env=env)
    digest = _DigestSink()
    attached = [digest, *sinks]
    trace_sink: trace_log.JsonlChangeSink | None = None
    if settings["trace"]:
        trace_log.configure(settings["trace_dir"], max_bytes=settings["trace_max_bytes"])
        trace_sink = trace_log.JsonlChangeSink()
        trace_sink.mark("start", puzzle=grid.to_string())
        attached.append(trace_sink)

    puzzle = grid.to_string()
    unsubscribers = [grid.subscribe(sink) for sink in attached]
    started = time.perf_counter()
    try:
        solver = BacktrackSolver(grid)
        result = solver.solve(should_stop=_deadline_check(settings["timeout_ms"], should_stop))
    finally:
        for unsubscribe in unsubscribers:
            unsubscribe()
    elapsed_ms = int((time.perf_counter() - started) * 1000)

    reason = result.reason
    if reason == "stopped" and settings["timeout_ms"] and (should_stop is None or not should_stop()):
        reason = "timeout"

    if trace_sink is not None:
        trace_sink.mark("outcome", outcome=result.outcome.value, grid=grid.to_string())

    payload: Dict[str, Any] = {
        "outcome": result.outcome.value,
        "reason": reason,
        "puzzle": puzzle,
        "grid": grid.to_string(),
        "stats": result.stats.to_payload(),
        "events": digest.count,
        "events_digest": digest.hexdigest(),
        "time_ms": elapsed_ms,
        "trace_path": str(trace_sink.path) if trace_sink is not None and trace_sink.path else None,
    }
    _LOGGER.info(
        "solve %s in %d ms (%d placements, %d backtracks)",
        payload["outcome"],
        elapsed_ms,
        result.stats.placements,
        result.stats.backtracks,
    )
    return payload, result


def solve_rows(rows: Sequence[Sequence[int]], **kwargs: Any) -> Tuple[Dict[str, Any], SolveResult]:
    """Build a :class:`Grid` from ``rows`` and delegate to :func:`solve_grid`."""

    return solve_grid(Grid(rows), **kwargs)


__all__ = ["resolve_settings", "solve_grid", "solve_rows"]
