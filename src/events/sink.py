"""Typed change notifications emitted on every cell write."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Tuple


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """A single cell write: ``digit`` is the new value, 0 when cleared."""

    row: int
    col: int
    digit: int

    def to_payload(self) -> dict:
        return {"row": int(self.row), "col": int(self.col), "digit": int(self.digit)}


ChangeSink = Callable[[ChangeEvent], None]


@dataclass
class EventRecorder:
    """In-memory sink preserving the order in which events arrived."""

    events: List[ChangeEvent] = field(default_factory=list)

    def __call__(self, event: ChangeEvent) -> None:
        self.events.append(event)

    def __len__(self) -> int:
        return len(self.events)

    def snapshot(self) -> Tuple[ChangeEvent, ...]:
        return tuple(self.events)

    def payloads(self) -> List[dict]:
        return [event.to_payload() for event in self.events]

    def reset(self) -> None:
        self.events.clear()


def fan_out(*sinks: ChangeSink) -> ChangeSink:
    """Return a sink forwarding each event to ``sinks`` in order."""

    targets: Tuple[ChangeSink, ...] = tuple(sinks)

    def _forward(event: ChangeEvent) -> None:
        for sink in targets:
            sink(event)

    return _forward


__all__ = ["ChangeEvent", "ChangeSink", "EventRecorder", "fan_out"]
