"""JSONL trace writer with size based rotation.

Solver change events are appended one JSON object per line under
``<log_dir>/<YYYYMMDD>/trace_<NN>.jsonl``.  Writes are serialised with a module
lock because sinks run on the solver's worker thread.
"""

from __future__ import annotations

import json
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from .sink import ChangeEvent

__all__ = ["JsonlChangeSink", "append_event", "configure", "current_log_path"]

_DEFAULT_MAX_BYTES = 100 * 1024 * 1024
_LOCK = threading.Lock()
_LOG_DIR = Path("logs/trace")
_MAX_BYTES = _DEFAULT_MAX_BYTES
_CURRENT_PATH: Path | None = None


def configure(base_dir: str | Path, *, max_bytes: int | None = None) -> None:
    """Configure the logger to use ``base_dir`` for all files."""

    global _LOG_DIR, _MAX_BYTES, _CURRENT_PATH
    with _LOCK:
        _LOG_DIR = Path(base_dir)
        _MAX_BYTES = max_bytes or _DEFAULT_MAX_BYTES
        _CURRENT_PATH = None


def _date_prefix() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%d")


def _resolve_log_path() -> Path:
    global _CURRENT_PATH
    date_dir = _LOG_DIR / _date_prefix()
    date_dir.mkdir(parents=True, exist_ok=True)

    if _CURRENT_PATH is not None and _CURRENT_PATH.parent == date_dir and _CURRENT_PATH.exists():
        if _CURRENT_PATH.stat().st_size < _MAX_BYTES:
            return _CURRENT_PATH

    counter = 0
    while True:
        candidate = date_dir / f"trace_{counter:02d}.jsonl"
        if not candidate.exists() or candidate.stat().st_size < _MAX_BYTES:
            _CURRENT_PATH = candidate
            return candidate
        counter += 1


def append_event(event: Dict[str, Any]) -> Path:
    """Append ``event`` to the active JSONL file and return the file path."""

    payload = dict(event)
    payload.setdefault("ts", datetime.now(timezone.utc).isoformat(timespec="milliseconds"))

    line = json.dumps(payload, sort_keys=True, ensure_ascii=False)
    with _LOCK:
        path = _resolve_log_path()
        with path.open("a", encoding="utf-8") as handle:
            handle.write(line + "\n")
    return path


def current_log_path() -> Path | None:
    return _CURRENT_PATH


class JsonlChangeSink:
    """Change sink that writes every event to the trace log.

    Each record carries ``run_id`` and a per-run ``seq`` starting at 1 so a
    stream can be replayed in order even when several runs share a file.
    """

    def __init__(self, run_id: str | None = None) -> None:
        self.run_id = run_id or f"run-{uuid.uuid4().hex[:12]}"
        self.seq = 0
        self.path: Path | None = None

    def __call__(self, event: ChangeEvent) -> None:
        self.seq += 1
        record = {"kind": "cell", "run_id": self.run_id, "seq": self.seq, **event.to_payload()}
        self.path = append_event(record)

    def mark(self, kind: str, **fields: Any) -> None:
        """Write a non-cell record such as the run's start or outcome."""

        record = {"kind": kind, "run_id": self.run_id, "seq": self.seq, **fields}
        self.path = append_event(record)
