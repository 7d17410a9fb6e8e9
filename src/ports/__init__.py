"""Port facades wrapping the solver and the printers."""

from __future__ import annotations

from .printer_port import export
from .solver_port import resolve_settings, solve_grid, solve_rows

__all__ = [
    "export",
    "resolve_settings",
    "solve_grid",
    "solve_rows",
]
