"""Zoom levels and gridline layout.

A zoom level only changes how wide the track is drawn and how dense the
gridlines are; it never alters stored times. Gridline positions are
expressed as fractions of the track width so they are independent of
the rendered pixel size.
"""

import math

import numpy as np

from timeline_planner.models.settings_models import ZOOM_LEVELS, ZoomLevel
from timeline_planner.time_transform import format_time, to_remaining

# Absorbs float error in total / tick for exact multiples (210 / 0.1)
_TICK_TOLERANCE = 1e-9


def get_zoom_level(index: int) -> ZoomLevel:
    """Return the zoom level at ``index``, clamped to the table."""
    return ZOOM_LEVELS[clamp_zoom_index(index)]


def clamp_zoom_index(index: int) -> int:
    return min(max(0, index), len(ZOOM_LEVELS) - 1)


def zoom_in(index: int) -> int:
    return clamp_zoom_index(index + 1)


def zoom_out(index: int) -> int:
    return clamp_zoom_index(index - 1)


def track_pixel_width(level: ZoomLevel, base_width: float) -> float:
    """Rendered pixel width of the full track at a zoom level."""
    return level.magnification * base_width


def gridline_count(tick_interval: float, total_duration: float) -> int:
    """Number of multiples of the tick in ``[0, total_duration]``."""
    if tick_interval <= 0 or total_duration < 0:
        return 0
    return math.floor(total_duration / tick_interval + _TICK_TOLERANCE) + 1


def gridline_positions(tick_interval: float, total_duration: float) -> np.ndarray:
    """Gridline positions as fractions of the track width.

    One gridline is placed at every multiple of ``tick_interval`` from 0
    up to and including the last multiple not exceeding
    ``total_duration``.

    Args:
        tick_interval: Seconds between gridlines.
        total_duration: Countdown window length.

    Returns:
        1D array of fractions in ``[0, 1]``, empty for degenerate input.
    """
    count = gridline_count(tick_interval, total_duration)
    if count == 0 or total_duration <= 0:
        return np.array([])
    elapsed = np.arange(count) * tick_interval
    return elapsed / total_duration


def scale_markers(
    tick_interval: float, total_duration: float
) -> tuple[np.ndarray, list[str]]:
    """Gridline positions together with their remaining-time labels.

    Returns:
        Tuple of (positions, labels), where each label is the formatted
        remaining time at that gridline.
    """
    positions = gridline_positions(tick_interval, total_duration)
    labels = [
        format_time(to_remaining(i * tick_interval, total_duration))
        for i in range(positions.size)
    ]
    return positions, labels
