"""Render a puzzle and its solution side by side on a landscape PDF page."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.axes import Axes  # noqa: E402
from matplotlib.backends.backend_pdf import PdfPages  # noqa: E402

from project_config import get_section  # noqa: E402

INCH_PER_CM = 0.3937007874


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _page_settings() -> Dict[str, Any]:
    pdf_cfg = _as_dict(get_section("pdf", {}))
    page = _as_dict(pdf_cfg.get("page"))
    rendering = _as_dict(pdf_cfg.get("rendering"))
    return {
        "width_cm": float(page.get("width_cm", 29.7)),
        "height_cm": float(page.get("height_cm", 21.0)),
        "margin_cm": float(page.get("margin_cm", 2.5)),
        "gap_cm": float(page.get("gap_cm", 2.0)),
        "footer_offset_cm": float(page.get("footer_offset_cm", 1.0)),
        "font_scale": float(rendering.get("font_scale_factor", 0.65)),
        "given_color": str(rendering.get("given_color", "black")),
        "filled_color": str(rendering.get("filled_color", "dimgray")),
    }


def _draw_grid(
    ax: Axes,
    values: Sequence[Sequence[int]],
    givens: Sequence[Sequence[bool]],
    *,
    page_w_in: float,
    page_h_in: float,
    left_in: float,
    bottom_in: float,
    size_in: float,
    settings: Dict[str, Any],
) -> None:
    ax.set_position([left_in / page_w_in, bottom_in / page_h_in, size_in / page_w_in, size_in / page_h_in])
    for idx in range(10):
        linewidth = 1.0 if idx % 3 else 2.5
        ax.axvline(idx / 9, color="k", linewidth=linewidth)
        ax.axhline(idx / 9, color="k", linewidth=linewidth)
    ax.set_xlim(0, 1)
    ax.set_ylim(0, 1)
    ax.axis("off")
    font_size = max(1, int(settings["font_scale"] * size_in * 72 / 9))
    for r in range(9):
        for c in range(9):
            value = values[r][c]
            if not value:
                continue
            given = bool(givens[r][c])
            ax.text(
                (c + 0.5) / 9,
                1 - (r + 0.5) / 9,
                str(value),
                ha="center",
                va="center",
                fontsize=font_size,
                fontweight="bold" if given else "normal",
                color=settings["given_color"] if given else settings["filled_color"],
            )


def export_pdf(
    puzzle: Sequence[Sequence[int]],
    solution: Optional[Sequence[Sequence[int]]],
    out_path: str | Path,
    *,
    footer: str | None = None,
) -> Path:
    """Write ``puzzle`` (left) and ``solution`` (right) to a one-page PDF.

    ``solution`` may be ``None`` for an unsolvable puzzle, in which case only
    the starting grid is drawn.  Returns the written path.
    """

    settings = _page_settings()
    target = Path(out_path)
    target.parent.mkdir(parents=True, exist_ok=True)

    page_w_in = settings["width_cm"] * INCH_PER_CM
    page_h_in = settings["height_cm"] * INCH_PER_CM
    margin_in = settings["margin_cm"] * INCH_PER_CM
    gap_in = settings["gap_cm"] * INCH_PER_CM
    avail_w = page_w_in - 2 * margin_in - gap_in
    avail_h = page_h_in - 2 * margin_in
    grid_size = min(avail_w / 2, avail_h)
    bottom = (page_h_in - grid_size) / 2

    givens = [[value != 0 for value in row] for row in puzzle]
    panels = [puzzle] if solution is None else [puzzle, solution]

    with PdfPages(target) as pdf:
        fig = plt.figure(figsize=(page_w_in, page_h_in))
        try:
            for index, values in enumerate(panels):
                left = margin_in + index * (grid_size + gap_in)
                ax = fig.add_axes([0, 0, 1, 1], frameon=False)
                _draw_grid(
                    ax,
                    values,
                    givens,
                    page_w_in=page_w_in,
                    page_h_in=page_h_in,
                    left_in=left,
                    bottom_in=bottom,
                    size_in=grid_size,
                    settings=settings,
                )
            if footer:
                footer_y = (settings["footer_offset_cm"] * INCH_PER_CM) / page_h_in
                fig.text(0.5, footer_y, footer, ha="center", va="bottom", fontsize=8)
            pdf.savefig(fig)
        finally:
            plt.close(fig)
    return target


__all__ = ["export_pdf"]
