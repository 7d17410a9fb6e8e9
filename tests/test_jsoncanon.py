from __future__ import annotations

import math

import pytest

from contracts.jsoncanon import jcs_dump, jcs_sha256
from events import ChangeEvent
from solver import SolveOutcome


def test_canonical_order_and_numbers() -> None:
    payload_a = {"b": 2, "a": 1.0}
    payload_b = {"a": 1, "b": 2}
    assert jcs_dump(payload_a) == jcs_dump(payload_b)
    assert jcs_sha256(payload_a) == jcs_sha256(payload_b)


def test_enums_and_payload_objects() -> None:
    assert jcs_dump({"outcome": SolveOutcome.SOLVED}) == b'{"outcome":"solved"}'
    assert jcs_dump(ChangeEvent(1, 2, 3)) == b'{"col":2,"digit":3,"row":1}'


def test_rejects_nan() -> None:
    with pytest.raises(ValueError):
        jcs_dump({"value": math.nan})


def test_rejects_unknown_types() -> None:
    with pytest.raises(TypeError):
        jcs_dump({"value": object()})
