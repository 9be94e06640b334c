"""Models for the derived timeline view.

The pipeline projects a ``TimelineDocument`` into these models: positions
already reflect any in-progress drag, labels are preformatted, and the
grid is laid out for the current zoom level. Renderers only read them.
"""

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from timeline_planner.models.core_models import OverlapRange


class BarView(BaseModel):
    """A single drawable bar.

    Attributes:
        start: Elapsed position where the bar is drawn.
        cast_delay: Width of the wind-up prefix in seconds.
        duration: Width of the active part in seconds.
        label: Formatted remaining time shown on the bar.
        block_id: One-shot block id, None for repeating occurrences.
        index: Occurrence index for repeating bars, None for one-shots.
        overflowing: Whether the bar extends past the window end.
        dragging: Whether the bar belongs to the active drag.
        draggable: Whether a drag may start on this bar.
    """

    start: float
    cast_delay: float = 0.0
    duration: float
    label: str = ""
    block_id: str | None = None
    index: int | None = None
    overflowing: bool = False
    dragging: bool = False
    draggable: bool = True


class StreamRowView(BaseModel):
    """Both lanes (one-shot and repeating) of one event stream."""

    stream_id: str
    name: str
    color: str
    one_shot_bars: list[BarView] = Field(default_factory=list)
    repeating_bars: list[BarView] = Field(default_factory=list)


class GridView(BaseModel):
    """Gridlines for one zoom level.

    Attributes:
        positions: Gridline positions as fractions of the track width.
        labels: Remaining-time label for each gridline.
        tick_interval: Seconds between gridlines.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    positions: np.ndarray = Field(
        default_factory=lambda: np.array([]), description="Gridline fractions"
    )
    labels: list[str] = Field(default_factory=list, description="Gridline labels")
    tick_interval: float = Field(10.0, description="Gridline spacing")


class TimelineView(BaseModel):
    """Everything a renderer needs to draw the chart.

    Attributes:
        total_duration: Countdown window length in seconds.
        min_elapsed: Start floor, drawn as a shaded zone.
        magnification: Current zoom multiplier.
        track_width_px: Rendered pixel width of the full track.
        rows: One row per event stream.
        overlaps: Overlap ranges; empty while a drag is active.
        grid: Gridlines for the current zoom level.
        dragging: Whether a drag is in progress.
    """

    total_duration: float
    min_elapsed: float = 0.0
    magnification: float = 1.0
    track_width_px: float = 0.0
    rows: list[StreamRowView] = Field(default_factory=list)
    overlaps: list[OverlapRange] = Field(default_factory=list)
    grid: GridView = Field(default_factory=GridView)
    dragging: bool = False
