from __future__ import annotations

import json
from pathlib import Path

from board import Grid
from events import ChangeEvent, EventRecorder, fan_out
from events import log as trace_log
from ports.solver_port import solve_grid


def _read(path) -> list[dict]:
    return [json.loads(line) for line in path.read_text("utf-8").splitlines()]


def test_append_event_rotates_by_size(tmp_path) -> None:
    trace_log.configure(tmp_path, max_bytes=1)
    paths = [trace_log.append_event({"kind": "probe", "n": n}) for n in range(3)]
    assert [p.name for p in paths] == ["trace_00.jsonl", "trace_01.jsonl", "trace_02.jsonl"]
    assert paths[0].parent.parent == tmp_path
    assert trace_log.current_log_path() == paths[-1]
    record = _read(paths[1])[0]
    assert record["n"] == 1
    assert "ts" in record


def test_jsonl_sink_numbers_records(tmp_path) -> None:
    trace_log.configure(tmp_path)
    sink = trace_log.JsonlChangeSink(run_id="run-test")
    sink.mark("start")
    sink(ChangeEvent(0, 1, 5))
    sink(ChangeEvent(0, 1, 0))
    records = _read(sink.path)
    assert [r["kind"] for r in records] == ["start", "cell", "cell"]
    assert [r["seq"] for r in records] == [0, 1, 2]
    assert records[2]["digit"] == 0
    assert {r["run_id"] for r in records} == {"run-test"}


def test_fan_out_preserves_order() -> None:
    first, second = EventRecorder(), EventRecorder()
    sink = fan_out(first, second)
    sink(ChangeEvent(3, 4, 5))
    assert first.snapshot() == second.snapshot() == (ChangeEvent(3, 4, 5),)
    first.reset()
    assert len(first) == 0


def test_solve_with_trace_writes_every_event(tmp_path, puzzle_rows) -> None:
    payload, _ = solve_grid(Grid(puzzle_rows), trace=True, trace_dir=str(tmp_path))
    assert payload["trace_path"] is not None
    records = _read(Path(payload["trace_path"]))
    assert records[0]["kind"] == "start"
    assert records[-1]["kind"] == "outcome"
    assert records[-1]["outcome"] == "solved"
    cells = [r for r in records if r["kind"] == "cell"]
    assert len(cells) == payload["events"]
