"""Puzzle loaders: CSV with blank markers, compact strings and JSON payloads."""

from __future__ import annotations

from .text_loader import (
    FORMATS,
    Matrix,
    PuzzleFormatError,
    format_csv,
    load_puzzle,
    parse_compact,
    parse_csv,
    parse_json,
)

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
