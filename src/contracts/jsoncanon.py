"""Canonical JSON helpers.

Payloads are reduced to a stable byte form by sorting object keys, turning
tuples into arrays and emitting UTF-8 without insignificant whitespace.  The
digest of that form is what the determinism checks compare between runs.
"""

from __future__ import annotations

import hashlib
import json
import math
from enum import Enum
from typing import Any

__all__ = ["jcs_dump", "jcs_sha256"]


def _canonicalize(obj: Any) -> Any:
    if obj is None or isinstance(obj, (bool, int, str)):
        if isinstance(obj, Enum):
            return obj.value
        return obj
    if isinstance(obj, float):
        if math.isnan(obj) or math.isinf(obj):
            raise ValueError("NaN and Infinity are not permitted in canonical payloads")
        if obj.is_integer():
            return int(obj)
        return obj
    if isinstance(obj, (list, tuple)):
        return [_canonicalize(item) for item in obj]
    if isinstance(obj, dict):
        return {str(key): _canonicalize(obj[key]) for key in sorted(obj.keys(), key=str)}
    to_payload = getattr(obj, "to_payload", None)
    if callable(to_payload):
        return _canonicalize(to_payload())
    raise TypeError(f"Unsupported type for canonicalisation: {type(obj)!r}")


def jcs_dump(obj: Any) -> bytes:
    """Return canonical bytes for ``obj``.

    Unsupported value types raise :class:`TypeError`; non-finite floats raise
    :class:`ValueError`.
    """

    canonical = _canonicalize(obj)
    dumped = json.dumps(
        canonical,
        sort_keys=True,
        ensure_ascii=False,
        separators=(",", ":"),
        allow_nan=False,
    )
    return dumped.encode("utf-8")


def jcs_sha256(obj: Any) -> str:
    """Return the ``sha256`` digest of the canonical representation of ``obj``."""

    digest = hashlib.sha256(jcs_dump(obj)).hexdigest()
    return f"sha256-{digest}"
