"""
Projection of a timeline document into a drawable view.

This module combines the engine stages (repeating expansion, overlap
detection, gridline layout and drag offsets) into a single
``TimelineView``, separating the computation from rendering and UI
concerns. Nothing is cached: every call recomputes from the document.
"""

import logging

from timeline_planner.models.core_models import (
    DragState,
    EventStream,
    OverlapRange,
    TimelineDocument,
)
from timeline_planner.models.settings_models import TimelineSettings
from timeline_planner.models.view_models import (
    BarView,
    GridView,
    StreamRowView,
    TimelineView,
)
from timeline_planner.overlap import collect_overlap_intervals, detect_overlaps
from timeline_planner.repeating import expand_repeating
from timeline_planner.time_transform import format_time_fixed, to_remaining
from timeline_planner.zoom import get_zoom_level, scale_markers, track_pixel_width

logger = logging.getLogger(__name__)


def build_grid(zoom_index: int, total_duration: float) -> GridView:
    """Lay out the gridlines for a zoom level.

    Args:
        zoom_index: Index into the zoom table (clamped).
        total_duration: Countdown window length.

    Returns:
        GridView with positions and remaining-time labels.
    """
    level = get_zoom_level(zoom_index)
    positions, labels = scale_markers(level.tick_interval, total_duration)
    return GridView(
        positions=positions, labels=labels, tick_interval=level.tick_interval
    )


def _one_shot_bars(
    stream: EventStream, total: float, drag: DragState | None
) -> list[BarView]:
    bars = []
    for block in stream.one_shots:
        dragging = (
            drag is not None
            and drag.target.kind == "one_shot"
            and drag.target.stream_id == stream.id
            and drag.target.block_id == block.id
        )
        start = drag.current_start if dragging else block.start
        # The label keeps the pre-drag value until the drag is committed
        label_start = drag.original_start if dragging else block.start
        bars.append(
            BarView(
                start=start,
                cast_delay=block.cast_delay,
                duration=block.duration,
                label=format_time_fixed(to_remaining(label_start, total)),
                block_id=block.id,
                overflowing=start + block.cast_delay + block.duration > total,
                dragging=dragging,
            )
        )
    return bars


def _repeating_bars(
    stream: EventStream,
    total: float,
    drag: DragState | None,
    settings: TimelineSettings,
) -> list[BarView]:
    dragging = (
        drag is not None
        and drag.target.kind == "repeating"
        and drag.target.stream_id == stream.id
    )
    offset = drag.delta if dragging else 0.0

    occurrences = expand_repeating(
        stream.repeating,
        total,
        min_elapsed=settings.min_elapsed,
        gap_floor=settings.gap_floor,
        duration_floor=settings.duration_floor,
        max_occurrences=settings.max_occurrences,
    )

    bars = []
    for occurrence in occurrences:
        start = occurrence.start + offset
        if start >= total:
            continue
        bars.append(
            BarView(
                start=start,
                cast_delay=occurrence.cast_delay,
                duration=occurrence.duration,
                # The label keeps the pre-drag value until the drag is committed
                label=format_time_fixed(to_remaining(occurrence.start, total)),
                index=occurrence.index,
                overflowing=start + occurrence.cast_delay + occurrence.duration
                > total,
                dragging=dragging,
                draggable=occurrence.index == 0,
            )
        )
    return bars


def build_stream_row(
    stream: EventStream,
    total_duration: float,
    drag: DragState | None = None,
    settings: TimelineSettings | None = None,
) -> StreamRowView:
    """Compute the drawable bars of one stream.

    Args:
        stream: Stream to lay out.
        total_duration: Countdown window length.
        drag: Active drag, if any; the dragged bars follow its offset.
        settings: Engine parameters; defaults when None.

    Returns:
        StreamRowView with one-shot and repeating bars.
    """
    settings = settings or TimelineSettings()
    return StreamRowView(
        stream_id=stream.id,
        name=stream.name,
        color=stream.color,
        one_shot_bars=_one_shot_bars(stream, total_duration, drag),
        repeating_bars=_repeating_bars(stream, total_duration, drag, settings),
    )


def compute_overlaps(
    document: TimelineDocument, settings: TimelineSettings | None = None
) -> list[OverlapRange]:
    """Overlap ranges across all overlap-checked one-shot blocks."""
    settings = settings or TimelineSettings()
    intervals = collect_overlap_intervals(document.streams)
    return detect_overlaps(
        intervals, document.total_duration, epsilon=settings.overlap_epsilon
    )


def build_timeline_view(
    document: TimelineDocument,
    zoom_index: int = 0,
    drag: DragState | None = None,
    settings: TimelineSettings | None = None,
) -> TimelineView:
    """Project the whole document into a TimelineView.

    Overlaps are computed from the stored document and left out while a
    drag is in progress.

    Args:
        document: The authoritative document.
        zoom_index: Index into the zoom table.
        drag: Active drag, if any.
        settings: Engine parameters; defaults when None.

    Returns:
        The complete view, or an empty one if the computation failed.
    """
    settings = settings or TimelineSettings()
    total = document.total_duration
    try:
        level = get_zoom_level(zoom_index)
        rows = [
            build_stream_row(stream, total, drag, settings)
            for stream in document.streams
        ]
        overlaps = [] if drag is not None else compute_overlaps(document, settings)

        return TimelineView(
            total_duration=total,
            min_elapsed=settings.min_elapsed,
            magnification=level.magnification,
            track_width_px=track_pixel_width(level, settings.base_width_px),
            rows=rows,
            overlaps=overlaps,
            grid=build_grid(zoom_index, total),
            dragging=drag is not None,
        )
    except Exception as e:
        logger.error(f"Error building timeline view: {str(e)}")
        return TimelineView(total_duration=total, min_elapsed=settings.min_elapsed)
