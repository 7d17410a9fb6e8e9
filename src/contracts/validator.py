"""Public facade for payload validation."""

from __future__ import annotations

from typing import Any, List

from . import loader
from .errors import ManagedValidationError, ValidationIssue, ValidationReport, make_error


def _jsonschema_path(error: Any) -> str:
    path = getattr(error, "absolute_path", [])
    if not path:
        return "$"
    components: List[str] = ["$"]
    for part in path:
        if isinstance(part, int):
            components.append(f"[{part}]")
        else:
            components.append(f".{part}")
    return "".join(components)


def validate(payload: Any, artifact_type: str) -> ValidationReport:
    """Validate *payload* against the catalog schema for *artifact_type*.

    Every schema violation becomes one :class:`ValidationIssue`, ordered by
    location so the report is stable across runs.
    """

    issues: List[ValidationIssue] = []
    try:
        descriptor = loader.get_descriptor(artifact_type)
    except KeyError:
        issues.append(make_error("schema.not_found", f"Unknown artifact type {artifact_type}", "$"))
        return ValidationReport(ok=False, artifact_type=artifact_type, errors=issues)

    validator = loader.compile_schema(descriptor)
    for error in sorted(validator.iter_errors(payload), key=lambda err: list(map(str, err.absolute_path))):
        issues.append(make_error(f"schema.{error.validator}", error.message, _jsonschema_path(error)))
    return ValidationReport(ok=not issues, artifact_type=artifact_type, errors=issues)


def assert_valid(payload: Any, artifact_type: str) -> None:
    """Raise :class:`ManagedValidationError` when *payload* fails validation."""

    report = validate(payload, artifact_type)
    if not report.ok:
        raise ManagedValidationError(artifact_type, report.errors)


__all__ = ["assert_valid", "validate"]
