"""Core domain models for countdown timeline planning."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from timeline_planner.constants import (
    DEFAULT_CHART_TITLE,
    DEFAULT_TOTAL_DURATION,
    MIN_ELAPSED,
)


class DocumentModel(BaseModel):
    """Base for models persisted inside a timeline document.

    Fields are written with camelCase keys (``castDelay``, ``totalDuration``)
    and can be populated by either spelling.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EffectInterval(DocumentModel):
    """One concrete occurrence of a timed action.

    The occurrence starts at ``start`` (elapsed seconds), spends
    ``cast_delay`` seconds winding up and is then active for ``duration``
    seconds. Only the active window takes part in overlap checks; the
    cast delay contributes to the drawn width.

    Attributes:
        start: Elapsed time at which the action is issued.
        cast_delay: Wind-up time before the effect becomes active.
        duration: Length of the active window.
    """

    start: float = Field(MIN_ELAPSED, description="Elapsed start time in seconds")
    cast_delay: float = Field(0.0, description="Wind-up time before activation")
    duration: float = Field(..., description="Active window length in seconds")

    @property
    def effect_start(self) -> float:
        """Elapsed time at which the active window opens."""
        return self.start + self.cast_delay

    @property
    def effect_end(self) -> float:
        """Elapsed time at which the active window closes (exclusive)."""
        return self.start + self.cast_delay + self.duration


class OneShotBlock(EffectInterval):
    """A manually placed effect occurrence owned by an event stream.

    Attributes:
        id: Identifier unique within the document.
        is_unique: Whether the duration currently carries the unique factor.
    """

    id: str = Field(..., description="Block identifier")
    is_unique: bool = Field(False, description="Unique duration toggle state")


class Occurrence(EffectInterval):
    """An occurrence produced by expanding a repeating action.

    Attributes:
        index: Position in the expanded sequence, starting at 0.
    """

    index: int = Field(..., ge=0, description="Occurrence index")


class RepeatingEventSpec(DocumentModel):
    """Periodic action definition.

    Occurrence ``i`` begins at ``start + i * gap``. The stored ``start`` is
    the only persisted position; every occurrence is derived from it.

    Attributes:
        start: Elapsed start of occurrence 0.
        cast_delay: Wind-up time of every occurrence.
        gap: Spacing between consecutive occurrence starts.
        duration: Active window length of every occurrence.
        is_unique: Whether the duration currently carries the unique factor.
    """

    start: float = Field(MIN_ELAPSED, description="Start of occurrence 0")
    cast_delay: float = Field(0.0, description="Per-occurrence wind-up time")
    gap: float = Field(30.0, description="Spacing between occurrence starts")
    duration: float = Field(10.0, description="Per-occurrence active length")
    is_unique: bool = Field(False, description="Unique duration toggle state")


class OverlapRange(BaseModel):
    """A maximal span where two or more effects are active at once.

    Attributes:
        start: Elapsed time at which the overlap begins.
        end: Elapsed time at which the overlap ends.
    """

    start: float = Field(..., description="Overlap start in elapsed seconds")
    end: float = Field(..., description="Overlap end in elapsed seconds")

    @property
    def width(self) -> float:
        return self.end - self.start


class EventStream(DocumentModel):
    """One named lane of the chart.

    Attributes:
        id: Stream identifier unique within the document.
        name: Display name, also used in exported callouts.
        color: Matplotlib colour used for the stream's bars.
        check_overlap: Whether one-shot blocks take part in overlap checks.
        one_shots: Manually placed blocks.
        repeating: The stream's periodic action.
    """

    id: str = Field(..., description="Stream identifier")
    name: str = Field("", description="Display name")
    color: str = Field("tab:blue", description="Bar colour")
    check_overlap: bool = Field(True, description="Include in overlap checks")
    one_shots: list[OneShotBlock] = Field(
        default_factory=list, description="One-shot blocks"
    )
    repeating: RepeatingEventSpec = Field(
        default_factory=RepeatingEventSpec, description="Repeating action"
    )


class TimelineDocument(DocumentModel):
    """The authoritative, editable state of a chart.

    Attributes:
        total_duration: Length of the countdown window in seconds.
        chart_title: Title shown in the editor and on exports.
        streams: Event streams in display order.
    """

    total_duration: float = Field(
        DEFAULT_TOTAL_DURATION, gt=0, description="Countdown window length"
    )
    chart_title: str = Field(DEFAULT_CHART_TITLE, description="Chart title")
    streams: list[EventStream] = Field(
        default_factory=list, description="Event streams"
    )

    def find_stream(self, stream_id: str) -> EventStream | None:
        """Return the stream with the given id, or None."""
        for stream in self.streams:
            if stream.id == stream_id:
                return stream
        return None


class DragTarget(BaseModel):
    """What a drag gesture is moving.

    Attributes:
        stream_id: Stream owning the dragged item.
        kind: ``"one_shot"`` for a block, ``"repeating"`` for an occurrence.
        block_id: Id of the dragged one-shot block.
        index: Occurrence index of a dragged repeating bar.
    """

    stream_id: str
    kind: Literal["one_shot", "repeating"]
    block_id: str | None = None
    index: int = Field(0, ge=0)


class DragState(BaseModel):
    """Transient context of an in-progress drag.

    ``original_start`` stays fixed for the whole gesture and is what the
    dragged bar's label shows; ``current_start`` follows the pointer.
    """

    target: DragTarget
    origin_x: float = Field(..., description="Pointer x at drag start")
    original_start: float = Field(..., description="Start before the drag")
    current_start: float = Field(..., description="Candidate start")

    @property
    def delta(self) -> float:
        return self.current_start - self.original_start
