"""Background execution of solver runs."""

from __future__ import annotations

from .background import Outcome, SolveInProgressError, SolveSession

__all__ = ["Outcome", "SolveInProgressError", "SolveSession"]
