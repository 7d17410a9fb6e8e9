"""Parsers turning puzzle text into a 9x9 matrix of digits."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Mapping, Sequence

from board.model import BOARD_SIZE
from contracts import validator
from project_config import get_setting

_LOGGER = logging.getLogger(__name__)

CELL_COUNT = BOARD_SIZE * BOARD_SIZE
COMPACT_BLANKS = frozenset(".0_")
DIGITS = frozenset("0123456789")
FORMATS = ("auto", "csv", "compact", "json")

Matrix = List[List[int]]


class PuzzleFormatError(ValueError):
    """Raised when puzzle text cannot be turned into a 9x9 digit matrix."""

    def __init__(self, message: str, *, index: int | None = None) -> None:
        if index is not None:
            message = f"{message} (cell {index})"
        super().__init__(message)
        self.index = index


def _default_blank() -> str:
    return str(get_setting("PUZZLE.blank_marker", "_"))


def _to_matrix(values: Sequence[int]) -> Matrix:
    return [list(values[r * BOARD_SIZE:(r + 1) * BOARD_SIZE]) for r in range(BOARD_SIZE)]


def parse_csv(text: str, blank: str | None = None) -> Matrix:
    """Parse comma separated cells, row-major, line breaks ignored.

    ``blank`` (``_`` unless configured otherwise) and ``0`` both mark an empty
    cell.  Exactly 81 tokens are required.
    """

    marker = _default_blank() if blank is None else blank
    joined = "".join(text.splitlines())
    tokens = [token.strip() for token in joined.split(",")]
    if tokens and tokens[-1] == "":
        tokens.pop()
    if len(tokens) != CELL_COUNT:
        raise PuzzleFormatError(f"expected {CELL_COUNT} cells, got {len(tokens)}")

    values: List[int] = []
    for index, token in enumerate(tokens):
        if token == marker:
            values.append(0)
            continue
        if len(token) != 1 or token not in DIGITS:
            raise PuzzleFormatError(f"cell value must be a digit or {marker!r}, got {token!r}", index=index)
        values.append(int(token))
    return _to_matrix(values)


def parse_compact(text: str) -> Matrix:
    """Parse an 81 character string; ``.``, ``0`` and ``_`` are blanks."""

    chars = "".join(text.split())
    if len(chars) != CELL_COUNT:
        raise PuzzleFormatError(f"expected {CELL_COUNT} cells, got {len(chars)}")
    values: List[int] = []
    for index, ch in enumerate(chars):
        if ch in COMPACT_BLANKS:
            values.append(0)
        elif ch in DIGITS:
            values.append(int(ch))
        else:
            raise PuzzleFormatError(f"unexpected character {ch!r}", index=index)
    return _to_matrix(values)


def parse_json(payload: Mapping[str, Any]) -> Matrix:
    """Parse a ``Puzzle`` payload (``{"grid": ...}`` or ``{"rows": ...}``)."""

    report = validator.validate(payload, "Puzzle")
    if not report.ok:
        first = report.errors[0]
        raise PuzzleFormatError(f"invalid puzzle payload at {first.path}: {first.msg}")
    if "grid" in payload:
        return parse_compact(str(payload["grid"]))
    return [list(row) for row in payload["rows"]]


def _detect_format(path: Path, text: str) -> str:
    suffix = path.suffix.lower()
    if suffix == ".json":
        return "json"
    if suffix == ".csv" or "," in text:
        return "csv"
    return "compact"


def load_puzzle(path: str | Path, fmt: str = "auto", *, blank: str | None = None) -> Matrix:
    """Read ``path`` and return its 9x9 matrix."""

    if fmt not in FORMATS:
        raise ValueError(f"Unsupported puzzle format: {fmt!r}")
    source = Path(path)
    try:
        text = source.read_text("utf-8")
    except UnicodeDecodeError as exc:
        raise PuzzleFormatError(f"{source} is not UTF-8 text: {exc.reason}") from exc
    if fmt == "auto":
        fmt = _detect_format(source, text)
    _LOGGER.debug("loading %s as %s", source, fmt)

    if fmt == "json":
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise PuzzleFormatError(f"{source} is not valid JSON: {exc.msg}") from exc
        if not isinstance(payload, dict):
            raise PuzzleFormatError(f"{source} must contain a JSON object")
        return parse_json(payload)
    if fmt == "csv":
        return parse_csv(text, blank=blank)
    return parse_compact(text)


def format_csv(rows: Sequence[Sequence[int]], blank: str | None = None) -> str:
    """Inverse of :func:`parse_csv`: one board row per line."""

    marker = _default_blank() if blank is None else blank
    lines = []
    for row in rows:
        lines.append(",".join(marker if value == 0 else str(value) for value in row))
    return ",\n".join(lines) + "\n"


__all__ = [
    "FORMATS",
    "Matrix",
    "PuzzleFormatError",
    "format_csv",
    "load_puzzle",
    "parse_compact",
    "parse_csv",
    "parse_json",
]
