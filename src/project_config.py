"""Utility helpers for loading project-wide configuration."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older Python
    import tomli as tomllib  # type: ignore[import-untyped]


_CONFIG_FILENAME = "config.toml"

# Environment variable -> dotted configuration path.
_ENV_OVERRIDES = {
    "SUDOKU_SOLVER_TIMEOUT_MS": "LIMITS.solver_timeout_ms",
    "SUDOKU_TRACE_ENABLED": "trace.enabled",
    "SUDOKU_TRACE_DIR": "trace.log_dir",
    "SUDOKU_BLANK_MARKER": "PUZZLE.blank_marker",
}

_MISSING = object()


def _config_path() -> Path:
    return Path(__file__).resolve().parents[1] / _CONFIG_FILENAME


@lru_cache(maxsize=1)
def get_config() -> Dict[str, Any]:
    """Load and cache the project configuration as a dictionary."""
    path = _config_path()
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except FileNotFoundError as exc:  # pragma: no cover - defensive guard
        raise RuntimeError(
            f"Configuration file '{_CONFIG_FILENAME}' was not found next to the project root"
        ) from exc


def reload() -> None:
    """Clear the cached configuration."""

    get_config.cache_clear()


def get_section(path: str, default: Any = _MISSING) -> Any:
    """Retrieve a nested configuration value using dotted notation."""

    data: Any = get_config()
    for part in path.split("."):
        if isinstance(data, dict) and part in data:
            data = data[part]
        else:
            if default is not _MISSING:
                return default
            raise KeyError(f"Configuration path '{path}' not found")
    return data


def coerce_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalised = value.strip().lower()
        if normalised in {"1", "true", "yes", "on"}:
            return True
        if normalised in {"0", "false", "no", "off"}:
            return False
    return None


def _coerce_like(raw: str, reference: Any) -> Any:
    if isinstance(reference, bool):
        return coerce_bool(raw)
    if isinstance(reference, int):
        try:
            return int(raw.strip())
        except ValueError:
            return None
    return raw


def get_setting(path: str, default: Any = None, env: Mapping[str, str] | None = None) -> Any:
    """Return ``path`` from ``config.toml`` with environment overrides applied.

    ``env`` defaults to :data:`os.environ`.  Overrides that cannot be coerced
    to the type of the configured value are ignored.
    """

    value = get_section(path, default)
    source = os.environ if env is None else env
    for key, target in _ENV_OVERRIDES.items():
        if target != path or key not in source:
            continue
        override = _coerce_like(str(source[key]), value)
        if override is not None:
            value = override
        break
    return value


__all__ = ["coerce_bool", "get_config", "get_section", "get_setting", "reload"]
