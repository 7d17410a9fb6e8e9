from __future__ import annotations

from typing import List

import pytest

PUZZLE = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)
SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)


def rows_of(text: str) -> List[List[int]]:
    return [[int(ch) for ch in text[r * 9:(r + 1) * 9]] for r in range(9)]


@pytest.fixture
def puzzle_rows() -> List[List[int]]:
    return rows_of(PUZZLE)


@pytest.fixture
def solution_rows() -> List[List[int]]:
    return rows_of(SOLUTION)


@pytest.fixture
def dead_end_rows() -> List[List[int]]:
    """Legal givens where (0, 7) has no candidate: 1-7 in its row, 8 and 9 in its block."""

    rows = [[0] * 9 for _ in range(9)]
    rows[0][:7] = [1, 2, 3, 4, 5, 6, 7]
    rows[1][8] = 8
    rows[2][8] = 9
    return rows


@pytest.fixture
def puzzle_text() -> str:
    return PUZZLE


@pytest.fixture
def solution_text() -> str:
    return SOLUTION
