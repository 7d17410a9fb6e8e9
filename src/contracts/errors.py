"""Shared error types for payload validation."""

from __future__ import annotations


from dataclasses import dataclass
from typing import List, Sequence

SEVERITY_ERROR = "ERROR"


@dataclass(frozen=True)
class ValidationIssue:
    """Single validation finding produced by a schema check."""

    code: str
    msg: str
    path: str
    severity: str


@dataclass(frozen=True)
class ValidationReport:
    """Aggregate result of validating one payload."""

    ok: bool
    artifact_type: str
    errors: List[ValidationIssue]


class ManagedValidationError(ValueError):
    """Raised by :func:`contracts.validator.assert_valid` on a failed report."""

    def __init__(self, artifact_type: str, issues: Sequence[ValidationIssue]) -> None:
        self.artifact_type = artifact_type
        self.issues = list(issues)
        summary = "; ".join(f"{issue.path}: {issue.msg}" for issue in self.issues[:3])
        super().__init__(f"{artifact_type} payload failed validation: {summary}")


def make_error(code: str, msg: str, path: str) -> ValidationIssue:
    """Construct an error-level :class:`ValidationIssue`."""

    return ValidationIssue(code=code, msg=msg, path=path, severity=SEVERITY_ERROR)


__all__ = [
    "SEVERITY_ERROR",
    "ManagedValidationError",
    "ValidationIssue",
    "ValidationReport",
    "make_error",
]
