"""Plain-text import and export of timeline documents.

Import reads one stream per line as ``name, start, castDelay, duration,
gap`` describing the stream's repeating action, and always replaces the
whole stream set. Export produces a callout list: one line per one-shot
block with its remaining time, ordered from the earliest call (largest
remaining time) to the last.
"""

import logging
import math

from timeline_planner.constants import (
    IMPORT_DEFAULT_CAST_DELAY,
    IMPORT_DEFAULT_DURATION,
    IMPORT_DEFAULT_GAP,
    MIN_ELAPSED,
    STREAM_COLORS,
)
from timeline_planner.document import generate_id
from timeline_planner.models.core_models import (
    EventStream,
    RepeatingEventSpec,
    TimelineDocument,
)
from timeline_planner.time_transform import format_time_fixed, to_remaining

logger = logging.getLogger(__name__)


# Custom exceptions
class TimelineError(Exception):
    """Base exception for timeline document errors."""

    pass


class ImportFormatError(TimelineError):
    """Exception raised when import text contains no usable records."""

    pass


def _number(part: str | None, default: float) -> float:
    if part is None:
        return default
    try:
        value = float(part)
    except ValueError:
        return default
    return value if math.isfinite(value) else default


def parse_import_line(line: str, index: int) -> EventStream:
    """Build a stream from one ``name, start, castDelay, duration, gap`` record.

    Args:
        line: A non-blank record line.
        index: Zero-based record number, used for the fallback name and
               the colour.

    Returns:
        A new stream with no one-shot blocks.
    """
    parts = [part.strip() for part in line.split(",")]
    fields = parts[1:5] + [None] * (4 - len(parts[1:5]))

    name = parts[0] or f"Task {index + 1}"
    repeating = RepeatingEventSpec(
        start=_number(fields[0], MIN_ELAPSED),
        cast_delay=_number(fields[1], IMPORT_DEFAULT_CAST_DELAY),
        duration=_number(fields[2], IMPORT_DEFAULT_DURATION),
        gap=_number(fields[3], IMPORT_DEFAULT_GAP),
    )
    return EventStream(
        id=generate_id(),
        name=name,
        color=STREAM_COLORS[index % len(STREAM_COLORS)],
        check_overlap=True,
        one_shots=[],
        repeating=repeating,
    )


def parse_import_text(
    text: str, document: TimelineDocument | None = None
) -> TimelineDocument:
    """Parse import text into a document that replaces all streams.

    Blank lines and lines starting with ``#`` are skipped. Missing or
    unparsable numbers fall back to the start floor, 0, 20 and 30
    seconds respectively.

    Args:
        text: Import text, one record per line.
        document: Current document whose total duration and title are kept.

    Returns:
        A new document holding only the imported streams.

    Raises:
        ImportFormatError: If the text contains no records.
    """
    lines = [line.strip() for line in text.splitlines()]
    records = [line for line in lines if line and not line.startswith("#")]
    if not records:
        raise ImportFormatError("No records found; expected one stream per line")

    streams = [parse_import_line(line, i) for i, line in enumerate(records)]
    logger.info(f"Imported {len(streams)} streams")

    if document is None:
        return TimelineDocument(streams=streams)
    return document.model_copy(update={"streams": streams})


def export_callouts(document: TimelineDocument) -> list[str]:
    """One ``"<remaining> <name>"`` line per one-shot block.

    Lines are sorted by descending remaining time; blocks with equal
    times keep their stream order.
    """
    callouts: list[tuple[float, str]] = []
    for stream in document.streams:
        for block in stream.one_shots:
            callouts.append(
                (to_remaining(block.start, document.total_duration), stream.name)
            )

    callouts.sort(key=lambda callout: callout[0], reverse=True)
    return [f"{format_time_fixed(remaining)} {name}" for remaining, name in callouts]


def export_text(document: TimelineDocument) -> str:
    """Full export: the chart title, a blank line, then the callouts."""
    return "\n".join([document.chart_title, ""] + export_callouts(document))
