from __future__ import annotations

import pytest

import project_config
from ports.solver_port import resolve_settings


def test_sections_and_defaults() -> None:
    assert project_config.get_section("PUZZLE.block.rows") == 3
    assert project_config.get_section("PUZZLE.blank_marker") == "_"
    assert project_config.get_section("missing.key", default=7) == 7
    with pytest.raises(KeyError):
        project_config.get_section("missing.key")


def test_environment_overrides_toml() -> None:
    env = {"SUDOKU_SOLVER_TIMEOUT_MS": "250", "SUDOKU_TRACE_ENABLED": "yes"}
    assert project_config.get_setting("LIMITS.solver_timeout_ms", env=env) == 250
    assert project_config.get_setting("trace.enabled", env=env) is True
    assert project_config.get_setting("trace.enabled", env={}) is False


def test_uncoercible_override_is_ignored() -> None:
    env = {"SUDOKU_SOLVER_TIMEOUT_MS": "soon"}
    assert project_config.get_setting("LIMITS.solver_timeout_ms", env=env) == 0


def test_cli_overrides_environment() -> None:
    env = {"SUDOKU_SOLVER_TIMEOUT_MS": "250", "SUDOKU_TRACE_DIR": "elsewhere"}
    settings = resolve_settings(env=env)
    assert settings["timeout_ms"] == 250
    assert settings["trace_dir"] == "elsewhere"

    settings = resolve_settings(timeout_ms=5, trace_dir="cli", env=env)
    assert settings["timeout_ms"] == 5
    assert settings["trace_dir"] == "cli"


def test_coerce_bool() -> None:
    assert project_config.coerce_bool("On") is True
    assert project_config.coerce_bool("0") is False
    assert project_config.coerce_bool("maybe") is None
