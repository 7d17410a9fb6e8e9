from __future__ import annotations

import json

from tools.cli.solve import main


def _write(tmp_path, name: str, text: str):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_solve_prints_boards(tmp_path, capsys, puzzle_text) -> None:
    path = _write(tmp_path, "classic.sdk", puzzle_text)
    assert main(["solve", path, "--trace-dir", str(tmp_path / "trace")]) == 0
    out = capsys.readouterr().out
    assert "| 5 3 4 | 6 7 8 | 9 1 2 |" in out
    assert "backtracks=" in out
    assert list((tmp_path / "trace").rglob("*.jsonl"))


def test_solve_json_and_exports(tmp_path, capsys, puzzle_text, solution_text) -> None:
    path = _write(tmp_path, "classic.json", json.dumps({"grid": puzzle_text}))
    pdf = tmp_path / "out.pdf"
    txt = tmp_path / "out.txt"
    code = main(["solve", path, "--json", "--background", "--pdf", str(pdf), "--text-out", str(txt)])
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["grid"] == solution_text
    assert pdf.exists() and txt.exists()


def test_solve_unsolvable_exit_code(tmp_path, capsys, dead_end_rows) -> None:
    text = "".join(str(v) for row in dead_end_rows for v in row)
    path = _write(tmp_path, "dead.sdk", text)
    assert main(["solve", path]) == 2
    assert "unsolvable" in capsys.readouterr().out


def test_check_reports_conflicts(tmp_path, capsys, puzzle_text) -> None:
    illegal = "5" + "5" + puzzle_text[2:]
    path = _write(tmp_path, "bad.sdk", illegal)
    assert main(["check", path]) == 1
    summary = json.loads(capsys.readouterr().out)
    assert summary["legal"] is False
    assert "r1" in summary["conflicts"]

    path = _write(tmp_path, "good.sdk", puzzle_text)
    assert main(["check", path]) == 0


def test_bad_input_exit_code(tmp_path, capsys) -> None:
    path = _write(tmp_path, "short.csv", "1,2,3")
    assert main(["solve", path]) == 4
    assert "expected 81 cells" in capsys.readouterr().err


def test_non_ascii_digit_exit_code(tmp_path, capsys) -> None:
    path = _write(tmp_path, "super.sdk", "²" + "0" * 80)
    assert main(["check", path]) == 4
    assert "unexpected character" in capsys.readouterr().err


def test_undecodable_file_exit_code(tmp_path, capsys) -> None:
    path = tmp_path / "binary.sdk"
    path.write_bytes(b"\xff" * 81)
    assert main(["check", str(path)]) == 4
    assert "not UTF-8" in capsys.readouterr().err
