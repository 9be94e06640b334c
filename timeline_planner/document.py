"""Editing operations on the authoritative timeline document.

Every operation takes a ``TimelineDocument`` and returns a new one; the
input is never mutated. Raw field values arrive exactly as typed in the
editor and are sanitised here, so an unparsable entry becomes zero
instead of an error. Unknown stream or block ids leave the document
unchanged.
"""

import logging
import math
from collections.abc import Callable
from uuid import uuid4

from timeline_planner.constants import (
    DEFAULT_CHART_TITLE,
    DEFAULT_TOTAL_DURATION,
    MIN_ELAPSED,
    STREAM_COLORS,
    UNIQUE_FACTOR,
)
from timeline_planner.duration_scaler import scale_unique_duration
from timeline_planner.models.core_models import (
    EventStream,
    OneShotBlock,
    RepeatingEventSpec,
    TimelineDocument,
)
from timeline_planner.time_transform import from_remaining

logger = logging.getLogger(__name__)

# Fields accepted by the editing functions
ONE_SHOT_FIELDS = ("start_remaining", "start", "cast_delay", "duration")
REPEATING_FIELDS = ONE_SHOT_FIELDS + ("gap",)

# Gap left between an existing block and a newly added one
_NEW_BLOCK_SPACING = 5.0
_NEW_BLOCK_DURATION = 30.0


def generate_id() -> str:
    return uuid4().hex[:12]


def parse_numeric(raw) -> float:
    """Coerce a raw field value to a float; blanks and garbage become 0."""
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(value) or math.isinf(value):
        return 0.0
    return value


def default_streams() -> list[EventStream]:
    """The stock stream set used for a fresh or unreadable document."""
    layout = [
        ("Striker1", MIN_ELAPSED, 28.0),
        ("Striker2", 30.0, 45.0),
        ("Striker3", 75.0, 45.0),
        ("Striker4", 120.0, 45.0),
        ("Special1", 165.0, 30.0),
        ("Special2", 195.0, 13.0),
    ]
    streams = []
    for number, (name, start, duration) in enumerate(layout, start=1):
        streams.append(
            EventStream(
                id=f"stream-{number}",
                name=name,
                color=STREAM_COLORS[(number - 1) % len(STREAM_COLORS)],
                check_overlap=True,
                one_shots=[
                    OneShotBlock(id=f"block-{number}", start=start, duration=duration)
                ],
                repeating=RepeatingEventSpec(
                    start=MIN_ELAPSED, cast_delay=0.0, gap=30.0, duration=10.0
                ),
            )
        )
    return streams


def default_document() -> TimelineDocument:
    return TimelineDocument(
        total_duration=DEFAULT_TOTAL_DURATION,
        chart_title=DEFAULT_CHART_TITLE,
        streams=default_streams(),
    )


def reset_document(document: TimelineDocument) -> TimelineDocument:
    """Restore the default streams and countdown length, keeping the title."""
    return document.model_copy(
        update={
            "streams": default_streams(),
            "total_duration": DEFAULT_TOTAL_DURATION,
        }
    )


def _replace_stream(
    document: TimelineDocument,
    stream_id: str,
    change: Callable[[EventStream], EventStream],
) -> TimelineDocument:
    if document.find_stream(stream_id) is None:
        logger.warning(f"Ignoring edit for unknown stream {stream_id!r}")
        return document
    streams = [
        change(stream) if stream.id == stream_id else stream
        for stream in document.streams
    ]
    return document.model_copy(update={"streams": streams})


def _replace_block(
    document: TimelineDocument,
    stream_id: str,
    block_id: str,
    change: Callable[[OneShotBlock], OneShotBlock],
) -> TimelineDocument:
    def update_stream(stream: EventStream) -> EventStream:
        blocks = [
            change(block) if block.id == block_id else block
            for block in stream.one_shots
        ]
        return stream.model_copy(update={"one_shots": blocks})

    return _replace_stream(document, stream_id, update_stream)


def rename_stream(
    document: TimelineDocument, stream_id: str, name: str
) -> TimelineDocument:
    return _replace_stream(
        document, stream_id, lambda s: s.model_copy(update={"name": name})
    )


def set_check_overlap(
    document: TimelineDocument, stream_id: str, enabled: bool
) -> TimelineDocument:
    return _replace_stream(
        document,
        stream_id,
        lambda s: s.model_copy(update={"check_overlap": bool(enabled)}),
    )


def set_total_duration(
    document: TimelineDocument, total_duration: float
) -> TimelineDocument:
    """Change the countdown length; non-positive values are ignored."""
    total = parse_numeric(total_duration)
    if total <= 0:
        logger.warning(f"Ignoring non-positive total duration {total_duration!r}")
        return document
    return document.model_copy(update={"total_duration": total})


def set_chart_title(document: TimelineDocument, title: str) -> TimelineDocument:
    return document.model_copy(update={"chart_title": title})


def add_one_shot(document: TimelineDocument, stream_id: str) -> TimelineDocument:
    """Append a one-shot block after the stream's last block.

    The new block copies the last block's duration, cast delay and unique
    flag and starts a few seconds after the end of its span. An empty
    stream gets a default block at the start floor.
    """

    def update_stream(stream: EventStream) -> EventStream:
        last = stream.one_shots[-1] if stream.one_shots else None
        if last is None:
            block = OneShotBlock(
                id=generate_id(), start=MIN_ELAPSED, duration=_NEW_BLOCK_DURATION
            )
        else:
            block = OneShotBlock(
                id=generate_id(),
                start=max(MIN_ELAPSED, last.effect_end + _NEW_BLOCK_SPACING),
                cast_delay=last.cast_delay,
                duration=last.duration,
                is_unique=last.is_unique,
            )
        return stream.model_copy(update={"one_shots": stream.one_shots + [block]})

    return _replace_stream(document, stream_id, update_stream)


def remove_one_shot(
    document: TimelineDocument, stream_id: str, block_id: str
) -> TimelineDocument:
    return _replace_stream(
        document,
        stream_id,
        lambda s: s.model_copy(
            update={"one_shots": [b for b in s.one_shots if b.id != block_id]}
        ),
    )


def _field_update(field: str, raw, total_duration: float) -> dict:
    value = parse_numeric(raw)
    if field == "start_remaining":
        return {"start": from_remaining(value, total_duration)}
    if field in ("start", "cast_delay"):
        return {field: value}
    if field == "duration":
        return {"duration": round(value, 3)}
    if field == "gap":
        return {"gap": float(max(0, int(value)))}
    raise ValueError(f"Unknown field {field!r}")


def update_one_shot(
    document: TimelineDocument, stream_id: str, block_id: str, field: str, raw
) -> TimelineDocument:
    """Apply a raw field edit to a one-shot block.

    Args:
        document: Document to edit.
        stream_id: Stream owning the block.
        block_id: Block to edit.
        field: One of ``start_remaining``, ``start``, ``cast_delay``, ``duration``.
        raw: Value as entered; unparsable input counts as 0.

    Returns:
        The edited document, or the original for an unknown field or id.
    """
    if field not in ONE_SHOT_FIELDS:
        logger.warning(f"Ignoring edit of unknown one-shot field {field!r}")
        return document
    update = _field_update(field, raw, document.total_duration)
    return _replace_block(
        document, stream_id, block_id, lambda b: b.model_copy(update=update)
    )


def update_repeating(
    document: TimelineDocument, stream_id: str, field: str, raw
) -> TimelineDocument:
    """Apply a raw field edit to a stream's repeating action.

    Accepts the one-shot fields plus ``gap``, which is truncated to a
    non-negative whole number of seconds.
    """
    if field not in REPEATING_FIELDS:
        logger.warning(f"Ignoring edit of unknown repeating field {field!r}")
        return document
    update = _field_update(field, raw, document.total_duration)
    return _replace_stream(
        document,
        stream_id,
        lambda s: s.model_copy(
            update={"repeating": s.repeating.model_copy(update=update)}
        ),
    )


def toggle_one_shot_unique(
    document: TimelineDocument,
    stream_id: str,
    block_id: str,
    factor: float = UNIQUE_FACTOR,
) -> TimelineDocument:
    def toggle(block: OneShotBlock) -> OneShotBlock:
        enabling = not block.is_unique
        return block.model_copy(
            update={
                "is_unique": enabling,
                "duration": scale_unique_duration(block.duration, enabling, factor),
            }
        )

    return _replace_block(document, stream_id, block_id, toggle)


def toggle_repeating_unique(
    document: TimelineDocument, stream_id: str, factor: float = UNIQUE_FACTOR
) -> TimelineDocument:
    def toggle(stream: EventStream) -> EventStream:
        spec = stream.repeating
        enabling = not spec.is_unique
        repeating = spec.model_copy(
            update={
                "is_unique": enabling,
                "duration": scale_unique_duration(spec.duration, enabling, factor),
            }
        )
        return stream.model_copy(update={"repeating": repeating})

    return _replace_stream(document, stream_id, toggle)


def set_one_shot_start(
    document: TimelineDocument, stream_id: str, block_id: str, start: float
) -> TimelineDocument:
    """Write an already-sanitised start time into a one-shot block."""
    return _replace_block(
        document, stream_id, block_id, lambda b: b.model_copy(update={"start": start})
    )


def set_repeating_start(
    document: TimelineDocument, stream_id: str, start: float
) -> TimelineDocument:
    """Write an already-sanitised start time into a repeating action."""
    return _replace_stream(
        document,
        stream_id,
        lambda s: s.model_copy(
            update={"repeating": s.repeating.model_copy(update={"start": start})}
        ),
    )
