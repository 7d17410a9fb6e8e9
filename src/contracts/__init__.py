"""Payload contracts: JSON schemas, validation and canonical digests."""

from __future__ import annotations

from .errors import ManagedValidationError, ValidationIssue, ValidationReport
from .jsoncanon import jcs_dump, jcs_sha256
from .validator import assert_valid, validate

__all__ = [
    "ManagedValidationError",
    "ValidationIssue",
    "ValidationReport",
    "assert_valid",
    "jcs_dump",
    "jcs_sha256",
    "validate",
]
