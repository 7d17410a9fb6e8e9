"""Run a search on a worker thread with cooperative cancellation."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, Iterable, Optional, Set, Tuple

from board.model import Grid
from events.sink import ChangeSink
from ports.solver_port import solve_grid
from solver.backtrack import SolveResult

_LOGGER = logging.getLogger(__name__)

_ACTIVE_LOCK = threading.Lock()
_ACTIVE: Set[int] = set()

Outcome = Tuple[Dict[str, Any], SolveResult]


class SolveInProgressError(RuntimeError):
    """Raised when a second search is started on a grid that already has one."""


class SolveSession:
    """One background search over one grid.

    The session claims the grid on :meth:`start` and releases it when the
    worker finishes, so two sessions can never mutate the same board at once.
    Sinks run on the worker thread.
    """

    def __init__(
        self,
        grid: Grid,
        *,
        sinks: Iterable[ChangeSink] = (),
        on_done: Optional[Callable[[Outcome], None]] = None,
        **solve_kwargs: Any,
    ) -> None:
        self.grid = grid
        self._sinks = tuple(sinks)
        self._on_done = on_done
        self._solve_kwargs = solve_kwargs
        self._cancel = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._outcome: Optional[Outcome] = None
        self._error: Optional[BaseException] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    def start(self) -> "SolveSession":
        if self._thread is not None:
            raise SolveInProgressError("session already started")
        key = id(self.grid)
        with _ACTIVE_LOCK:
            if key in _ACTIVE:
                raise SolveInProgressError("a search is already running on this grid")
            _ACTIVE.add(key)
        self._thread = threading.Thread(target=self._run, name="sudoku-solve", daemon=True)
        try:
            self._thread.start()
        except RuntimeError:
            with _ACTIVE_LOCK:
                _ACTIVE.discard(key)
            raise
        _LOGGER.debug("background search started on %r", self.grid)
        return self

    def cancel(self) -> None:
        self._cancel.set()

    def wait(self, timeout: float | None = None) -> Optional[Outcome]:
        """Join the worker and return ``(payload, result)``.

        Returns ``None`` if ``timeout`` expires first.  An exception raised on
        the worker is re-raised here.
        """

        if self._thread is None:
            raise RuntimeError("session has not been started")
        self._thread.join(timeout)
        if self._thread.is_alive():
            return None
        if self._error is not None:
            raise self._error
        return self._outcome

    def _run(self) -> None:
        try:
            self._outcome = solve_grid(
                self.grid,
                sinks=self._sinks,
                should_stop=self._cancel.is_set,
                **self._solve_kwargs,
            )
        except Exception as exc:
            _LOGGER.exception("background search failed")
            self._error = exc
        finally:
            with _ACTIVE_LOCK:
                _ACTIVE.discard(id(self.grid))
        if self._on_done is not None and self._outcome is not None:
            self._on_done(self._outcome)


__all__ = ["Outcome", "SolveInProgressError", "SolveSession"]
