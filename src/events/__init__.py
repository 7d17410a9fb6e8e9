"""Change notification primitives shared by the grid, solver and adapters."""

from __future__ import annotations

from .sink import ChangeEvent, ChangeSink, EventRecorder, fan_out

__all__ = ["ChangeEvent", "ChangeSink", "EventRecorder", "fan_out"]
