"""
Visualization of timeline views.

This module renders a ``TimelineView`` as a matplotlib Gantt chart: one
lane per stream for one-shot blocks and one for the repeating action,
with overlap bands, gridlines labelled in remaining time, and the
window end marked in red.
"""

import math

import matplotlib.patches as patches
from matplotlib.figure import Figure

from timeline_planner.models.view_models import BarView, TimelineView


def _draw_bar(ax, bar: BarView, y: float, height: float, color: str) -> None:
    """Draw one bar: hatched cast prefix followed by the active part."""
    if bar.cast_delay > 0:
        ax.add_patch(
            patches.Rectangle(
                (bar.start, y - height / 2),
                bar.cast_delay,
                height,
                facecolor=color,
                alpha=0.4,
                hatch="//",
                edgecolor="white",
                linewidth=0,
                zorder=2,
            )
        )

    edgecolor = "red" if bar.overflowing else "black"
    ax.add_patch(
        patches.Rectangle(
            (bar.start + bar.cast_delay, y - height / 2),
            bar.duration,
            height,
            facecolor=color,
            edgecolor=edgecolor,
            linewidth=1.5 if bar.overflowing or bar.dragging else 0.6,
            alpha=1.0 if bar.dragging or bar.draggable else 0.6,
            zorder=3 if bar.dragging else 2,
        )
    )
    if bar.label:
        ax.text(
            bar.start + bar.cast_delay + bar.duration / 2,
            y,
            bar.label,
            ha="center",
            va="center",
            fontsize=6,
            color="white",
            clip_on=True,
            zorder=4,
        )


def create_timeline_figure(
    view: TimelineView,
    *,
    lane_h_in: float = 0.35,
    min_h_in: float = 2.0,
    max_width_px: int = 8000,
    dpi: int = 100,
    min_label_spacing_px: float = 60.0,
) -> Figure:
    """Create a Gantt chart of a timeline view.

    Each stream takes two lanes: one-shot blocks on top and the repeating
    action below. The figure width follows the view's rendered track
    width (capped at ``max_width_px``) so magnified levels get wider
    charts.

    Args:
        view: The view to draw.
        lane_h_in: Physical height per lane in inches (default 0.35).
        min_h_in: Minimum figure height in inches (default 2.0).
        max_width_px: Upper bound on the figure width in pixels.
        dpi: Raster resolution for output (default 100).
        min_label_spacing_px: Gridline labels closer than this are thinned.

    Returns:
        Matplotlib Figure containing the chart. A figure with a
        "No streams" message is returned when the view has no rows.
    """
    total = view.total_duration
    width_px = min(max(view.track_width_px, 600.0), float(max_width_px))
    width_in = width_px / dpi

    # ---------- empty case ----------
    if not view.rows:
        fig = Figure(figsize=(width_in, min_h_in), dpi=dpi)
        ax = fig.subplots()
        ax.text(
            0.5, 0.5, "No streams", ha="center", va="center", transform=ax.transAxes
        )
        ax.axis("off")
        return fig

    lanes = 2 * len(view.rows)
    height_in = max(min_h_in, lanes * lane_h_in + 0.8)
    # Not registered with pyplot; nothing needs closing
    fig = Figure(figsize=(width_in, height_in), dpi=dpi)
    ax = fig.subplots()

    ax.set_xlim(0, total)
    ax.set_ylim(lanes - 0.5, -0.5)  # first stream on top

    # ---------- background ----------
    ax.axvspan(0, view.min_elapsed, color="mistyrose", alpha=0.6, zorder=0)
    for overlap in view.overlaps:
        ax.axvspan(overlap.start, overlap.end, color="red", alpha=0.2, zorder=0)

    for position in view.grid.positions:
        ax.axvline(
            position * total, color="gray", linestyle="--", linewidth=0.5, zorder=1
        )
    ax.axvline(total, color="red", linewidth=2, zorder=1)

    # ---------- bars ----------
    y_ticks = []
    y_labels = []
    for i, row in enumerate(view.rows):
        one_shot_y = 2 * i
        repeating_y = 2 * i + 1
        for bar in row.one_shot_bars:
            _draw_bar(ax, bar, one_shot_y, 0.7, row.color)
        for bar in row.repeating_bars:
            _draw_bar(ax, bar, repeating_y, 0.45, row.color)
        y_ticks += [one_shot_y, repeating_y]
        y_labels += [row.name, "repeat"]

    ax.set_yticks(y_ticks)
    ax.set_yticklabels(y_labels, fontsize=8)

    # ---------- remaining-time axis ----------
    positions = view.grid.positions
    if positions.size:
        spacing_px = width_px / max(positions.size, 1)
        step = max(1, math.ceil(min_label_spacing_px / spacing_px))
        ax.set_xticks(positions[::step] * total)
        ax.set_xticklabels(view.grid.labels[::step], fontsize=7)
    ax.set_xlabel("Remaining time", fontsize=9)

    for spine_name, spine in ax.spines.items():
        if spine_name != "left":
            spine.set_visible(False)

    ax.set_facecolor("white")
    fig.tight_layout()
    return fig
