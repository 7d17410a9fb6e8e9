"""Output adapters for boards: boxed text and PDF pages."""

from __future__ import annotations

from .pdf import export_pdf
from .text import render_grid

__all__ = ["export_pdf", "render_grid"]
