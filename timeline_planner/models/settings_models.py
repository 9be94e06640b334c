"""Configuration models for the timeline engine and editor.

This module defines Pydantic models that gather every tunable constant
of the engine (floors, caps, the unique factor) and the fixed zoom table.
The defaults reproduce the editor's stock behaviour; a custom
``TimelineSettings`` can be passed to the pipeline to change them.
"""

from pydantic import BaseModel, Field

from timeline_planner.constants import (
    DURATION_FLOOR,
    GAP_FLOOR,
    MAX_OCCURRENCES,
    MIN_ELAPSED,
    OVERLAP_EPSILON,
    UNIQUE_FACTOR,
)


class TimelineSettings(BaseModel):
    """Tunable parameters of the timeline engine.

    Attributes:
        min_elapsed: Floor applied to every start time (default 2.0 s).
        unique_factor: Multiplier for unique durations (default 1.19).
        gap_floor: Minimum spacing of repeating occurrences (default 0.1 s).
        duration_floor: Minimum occurrence duration (default 0.001 s).
        max_occurrences: Cap on expanded occurrences per stream (default 1000).
        overlap_epsilon: Narrowest overlap reported (default 0.001 s).
        base_width_px: Rendered track width at magnification 1 (default 1200).
    """

    min_elapsed: float = Field(
        MIN_ELAPSED, ge=0.0, description="Floor applied to start times"
    )
    unique_factor: float = Field(
        UNIQUE_FACTOR, gt=1.0, description="Unique duration multiplier"
    )
    gap_floor: float = Field(GAP_FLOOR, gt=0.0, description="Minimum repeat gap")
    duration_floor: float = Field(
        DURATION_FLOOR, gt=0.0, description="Minimum occurrence duration"
    )
    max_occurrences: int = Field(
        MAX_OCCURRENCES, ge=1, description="Cap on expanded occurrences"
    )
    overlap_epsilon: float = Field(
        OVERLAP_EPSILON, ge=0.0, description="Narrowest reported overlap"
    )
    base_width_px: int = Field(
        1200, ge=100, description="Track width in pixels at magnification 1"
    )


class ZoomLevel(BaseModel):
    """One entry of the zoom table.

    Attributes:
        magnification: Multiplier applied to the base track width.
        tick_interval: Seconds between gridlines at this level.
        label: Human-readable name shown in the zoom control.
    """

    magnification: float = Field(..., ge=1.0, description="Track width multiplier")
    tick_interval: float = Field(..., gt=0.0, description="Gridline spacing")
    label: str = Field("", description="Zoom control label")


# Coarse to fine
ZOOM_LEVELS: list[ZoomLevel] = [
    ZoomLevel(magnification=1, tick_interval=10, label="x1 (10s)"),
    ZoomLevel(magnification=2, tick_interval=5, label="x2 (5s)"),
    ZoomLevel(magnification=5, tick_interval=1, label="x5 (1s)"),
    ZoomLevel(magnification=10, tick_interval=0.5, label="x10 (0.5s)"),
    ZoomLevel(magnification=20, tick_interval=0.1, label="x20 (0.1s)"),
]

# Countdown lengths offered by the editor, in seconds
DURATION_OPTIONS: dict[str, float] = {
    "3:30": 210.0,
    "4:00": 240.0,
    "4:30": 270.0,
}
