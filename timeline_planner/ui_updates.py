"""UI update functions for the Gradio interface.

This module provides the callbacks behind the editor widgets. They take
the current document plus raw widget values and return a new document or
display values, so they can be exercised without a running interface.
Persistence happens in the interface layer after each edit.
"""

from matplotlib.figure import Figure

from timeline_planner.constants import MIN_ELAPSED
from timeline_planner.document import (
    add_one_shot,
    remove_one_shot,
    rename_stream,
    set_check_overlap,
    toggle_one_shot_unique,
    toggle_repeating_unique,
    update_one_shot,
    update_repeating,
)
from timeline_planner.drag import DragSession
from timeline_planner.models.core_models import DragTarget, TimelineDocument
from timeline_planner.models.settings_models import ZOOM_LEVELS, TimelineSettings
from timeline_planner.models.view_models import TimelineView
from timeline_planner.pipeline import build_timeline_view
from timeline_planner.repeating import occurrence_start
from timeline_planner.text_io import export_text, parse_import_text
from timeline_planner.time_transform import (
    format_time,
    format_time_fixed,
    parse_time_text,
    to_remaining,
)
from timeline_planner.visualization import create_timeline_figure
from timeline_planner.zoom import (
    get_zoom_level,
    track_pixel_width,
    zoom_in,
    zoom_out,
)

# Drag pointer origin used when a drag is driven by a pixel offset alone
_NUDGE_ORIGIN_X = 0.0


def zoom_labels() -> list[str]:
    return [level.label for level in ZOOM_LEVELS]


def zoom_index_from_label(label: str) -> int:
    """Index of the zoom level with the given label, 0 if unknown."""
    for index, level in enumerate(ZOOM_LEVELS):
        if level.label == label:
            return index
    return 0


def zoom_in_label(label: str) -> str:
    """Label of the next finer zoom level, clamped at the finest."""
    return ZOOM_LEVELS[zoom_in(zoom_index_from_label(label))].label


def zoom_out_label(label: str) -> str:
    return ZOOM_LEVELS[zoom_out(zoom_index_from_label(label))].label


def overlap_summary(view: TimelineView) -> str:
    """Describe the overlap ranges of a view in remaining time."""
    if not view.overlaps:
        return "No overlaps"
    lines = [f"{len(view.overlaps)} overlap(s):"]
    for overlap in view.overlaps:
        begin = format_time(to_remaining(overlap.start, view.total_duration))
        end = format_time(to_remaining(overlap.end, view.total_duration))
        lines.append(f"  {begin} -> {end} ({overlap.width:.3f}s)")
    return "\n".join(lines)


def render_timeline(
    document: TimelineDocument,
    zoom_label: str,
    settings: TimelineSettings | None = None,
) -> tuple[Figure, str]:
    """Render the chart and the overlap summary for the current zoom.

    Returns:
        Tuple of (figure, overlap_text).
    """
    view = build_timeline_view(
        document, zoom_index_from_label(zoom_label), settings=settings
    )
    return create_timeline_figure(view), overlap_summary(view)


def stream_choices(document: TimelineDocument) -> list[tuple[str, str]]:
    """(label, stream id) pairs for the stream selector."""
    return [(stream.name or stream.id, stream.id) for stream in document.streams]


def block_choices(
    document: TimelineDocument, stream_id: str | None
) -> list[tuple[str, str]]:
    """(label, block id) pairs for the one-shot selector of a stream."""
    stream = document.find_stream(stream_id) if stream_id else None
    if stream is None:
        return []
    total = document.total_duration
    return [
        (f"#{n} {format_time_fixed(to_remaining(block.start, total))}", block.id)
        for n, block in enumerate(stream.one_shots, start=1)
    ]


def stream_fields(document: TimelineDocument, stream_id: str | None) -> tuple:
    """Values of the stream editor widgets.

    Returns:
        Tuple of (name, check_overlap, start, cast_delay, duration, gap,
        is_unique), with neutral values when the stream does not exist.
    """
    stream = document.find_stream(stream_id) if stream_id else None
    if stream is None:
        return "", False, 0.0, 0.0, 0.0, 0.0, False
    spec = stream.repeating
    return (
        stream.name,
        stream.check_overlap,
        spec.start,
        spec.cast_delay,
        spec.duration,
        spec.gap,
        spec.is_unique,
    )


def block_fields(
    document: TimelineDocument, stream_id: str | None, block_id: str | None
) -> tuple:
    """Values of the one-shot editor widgets.

    Returns:
        Tuple of (remaining_text, cast_delay, duration, is_unique).
    """
    stream = document.find_stream(stream_id) if stream_id else None
    block = None
    if stream is not None:
        block = next((b for b in stream.one_shots if b.id == block_id), None)
    if block is None:
        return "", 0.0, 0.0, False
    remaining = to_remaining(block.start, document.total_duration)
    return (
        format_time_fixed(remaining),
        block.cast_delay,
        block.duration,
        block.is_unique,
    )


def edit_stream(
    document: TimelineDocument, stream_id: str, name: str, check_overlap: bool
) -> TimelineDocument:
    document = rename_stream(document, stream_id, name)
    return set_check_overlap(document, stream_id, check_overlap)


def edit_repeating(
    document: TimelineDocument,
    stream_id: str,
    start,
    cast_delay,
    duration,
    gap,
    is_unique: bool,
) -> TimelineDocument:
    """Apply the repeating editor's widget values to a stream.

    A change of the unique checkbox rescales the stored duration instead
    of taking the duration field as typed.
    """
    stream = document.find_stream(stream_id)
    if stream is None:
        return document
    if bool(is_unique) != stream.repeating.is_unique:
        return toggle_repeating_unique(document, stream_id)

    for field, raw in (
        ("start", start),
        ("cast_delay", cast_delay),
        ("duration", duration),
        ("gap", gap),
    ):
        document = update_repeating(document, stream_id, field, raw)
    return document


def edit_one_shot(
    document: TimelineDocument,
    stream_id: str,
    block_id: str,
    remaining_text: str,
    cast_delay,
    duration,
    is_unique: bool,
) -> TimelineDocument:
    """Apply the one-shot editor's widget values to a block.

    The start is entered as remaining time and limited to the range a
    start may take, as the time entry widget does.
    """
    stream = document.find_stream(stream_id)
    block = None
    if stream is not None:
        block = next((b for b in stream.one_shots if b.id == block_id), None)
    if block is None:
        return document
    if bool(is_unique) != block.is_unique:
        return toggle_one_shot_unique(document, stream_id, block_id)

    remaining = parse_time_text(
        remaining_text, minimum=0.0, maximum=document.total_duration - MIN_ELAPSED
    )
    document = update_one_shot(
        document, stream_id, block_id, "start_remaining", remaining
    )
    document = update_one_shot(document, stream_id, block_id, "cast_delay", cast_delay)
    return update_one_shot(document, stream_id, block_id, "duration", duration)


def add_block(document: TimelineDocument, stream_id: str) -> TimelineDocument:
    return add_one_shot(document, stream_id)


def remove_block(
    document: TimelineDocument, stream_id: str, block_id: str | None
) -> TimelineDocument:
    if not block_id:
        return document
    return remove_one_shot(document, stream_id, block_id)


def apply_drag(
    document: TimelineDocument,
    target: DragTarget,
    pixel_delta: float,
    zoom_label: str,
    settings: TimelineSettings | None = None,
) -> TimelineDocument:
    """Run a complete drag gesture of ``pixel_delta`` pixels on a target.

    The drag is measured against the track width of the current zoom
    level, exactly as a pointer drag on the rendered chart would be.
    """
    settings = settings or TimelineSettings()
    stream = document.find_stream(target.stream_id)
    if stream is None:
        return document

    if target.kind == "one_shot":
        block = next((b for b in stream.one_shots if b.id == target.block_id), None)
        if block is None:
            return document
        original_start = block.start
    else:
        original_start = occurrence_start(
            stream.repeating,
            target.index,
            min_elapsed=settings.min_elapsed,
            gap_floor=settings.gap_floor,
        )

    level = get_zoom_level(zoom_index_from_label(zoom_label))
    session = DragSession(min_elapsed=settings.min_elapsed)
    session.begin(
        target,
        _NUDGE_ORIGIN_X,
        original_start,
        track_pixel_width(level, settings.base_width_px),
        document.total_duration,
    )
    session.move(_NUDGE_ORIGIN_X + pixel_delta)
    return session.end(document)


def import_document(document: TimelineDocument, text: str) -> TimelineDocument:
    """Replace all streams with those parsed from import text.

    Raises:
        ImportFormatError: If the text contains no records.
    """
    return parse_import_text(text, document)


def export_document(document: TimelineDocument) -> str:
    return export_text(document)
