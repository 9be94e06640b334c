"""Pointer-drag to time mapping and the drag gesture session.

A drag is measured against the rendered width of the whole (possibly
magnified) track, so the same pixel movement is worth fewer seconds at a
higher zoom. The resulting start is floored at ``MIN_ELAPSED`` but never
capped, which lets a bar be dragged past the window end.

Pointer moves arrive far more often than the chart can be redrawn, so the
session keeps only the newest pending pointer position and recomputes at
most once per ``flush``.
"""

import logging

from timeline_planner.constants import MIN_ELAPSED
from timeline_planner.document import set_one_shot_start, set_repeating_start
from timeline_planner.models.core_models import (
    DragState,
    DragTarget,
    TimelineDocument,
)

logger = logging.getLogger(__name__)


def pixels_to_seconds(
    pixel_delta: float, track_pixel_width: float, total_duration: float
) -> float:
    """Convert a horizontal pixel displacement to seconds.

    Args:
        pixel_delta: Pointer displacement in pixels, negative for leftwards.
        track_pixel_width: Rendered width of the full track in pixels.
        total_duration: Countdown window length the track represents.

    Returns:
        Signed time delta, or 0 when the track has no width.
    """
    if track_pixel_width <= 0:
        return 0.0
    return (pixel_delta / track_pixel_width) * total_duration


def map_drag(
    original_start: float,
    pixel_delta: float,
    track_pixel_width: float,
    total_duration: float,
    *,
    min_elapsed: float = MIN_ELAPSED,
) -> float:
    """Candidate start time for a bar dragged by ``pixel_delta`` pixels."""
    delta = pixels_to_seconds(pixel_delta, track_pixel_width, total_duration)
    return max(min_elapsed, original_start + delta)


class LatestValueMailbox:
    """Single-slot mailbox that keeps only the most recent value.

    Posting overwrites any value not yet taken, so a consumer running at
    display rate never processes superseded pointer positions.
    """

    _EMPTY = object()

    def __init__(self):
        self._value = self._EMPTY

    def post(self, value) -> None:
        self._value = value

    def take(self):
        """Remove and return the pending value, or None if there is none."""
        value, self._value = self._value, self._EMPTY
        return None if value is self._EMPTY else value

    @property
    def pending(self) -> bool:
        return self._value is not self._EMPTY

    def clear(self) -> None:
        self._value = self._EMPTY


class DragSession:
    """The begin/move/end lifecycle of a single drag gesture.

    Only one drag is tracked at a time. ``end`` always commits the last
    candidate; ``cancel`` discards it and leaves the document as it was
    before the drag.

    Attributes:
        min_elapsed: Floor applied to candidate starts.
        state: Context of the active drag, or None when idle.
    """

    def __init__(self, min_elapsed: float = MIN_ELAPSED):
        self.min_elapsed = min_elapsed
        self.state: DragState | None = None
        self._pointer = LatestValueMailbox()
        self._track_pixel_width = 0.0
        self._total_duration = 0.0

    @property
    def active(self) -> bool:
        return self.state is not None

    def begin(
        self,
        target: DragTarget,
        origin_x: float,
        original_start: float,
        track_pixel_width: float,
        total_duration: float,
    ) -> bool:
        """Capture the drag origin and the item's pre-drag start.

        Args:
            target: The block or repeating occurrence being dragged.
            origin_x: Pointer x position at mouse-down.
            original_start: The dragged item's start before the drag.
            track_pixel_width: Rendered width of the full track.
            total_duration: Countdown window length.

        Returns:
            False if another drag is already active, in which case the
            request is ignored.
        """
        if self.state is not None:
            logger.warning(
                f"Ignoring drag of {target.stream_id!r}: a drag is already active"
            )
            return False
        self.state = DragState(
            target=target,
            origin_x=origin_x,
            original_start=original_start,
            current_start=original_start,
        )
        self._track_pixel_width = track_pixel_width
        self._total_duration = total_duration
        self._pointer.clear()
        return True

    def move(self, pointer_x: float) -> None:
        """Record a pointer position; only the newest one is kept."""
        if self.state is None:
            return
        self._pointer.post(pointer_x)

    def flush(self) -> DragState | None:
        """Recompute the candidate start from the newest pointer position.

        Meant to run once per display refresh. Returns the current drag
        state, unchanged when no pointer move arrived since the last flush.
        """
        if self.state is None:
            return None
        pointer_x = self._pointer.take()
        if pointer_x is not None:
            candidate = map_drag(
                self.state.original_start,
                pointer_x - self.state.origin_x,
                self._track_pixel_width,
                self._total_duration,
                min_elapsed=self.min_elapsed,
            )
            self.state = self.state.model_copy(update={"current_start": candidate})
        return self.state

    def end(self, document: TimelineDocument) -> TimelineDocument:
        """Commit the candidate start into the document and go idle.

        A repeating stream stores the start of occurrence 0, so the
        committed value is the dragged occurrence's start minus
        ``index * gap``.
        """
        state = self.flush()
        self._reset()
        if state is None:
            return document
        return commit_drag(document, state, min_elapsed=self.min_elapsed)

    def cancel(self) -> None:
        """Abandon the drag without touching the document."""
        self._reset()

    def _reset(self) -> None:
        self.state = None
        self._pointer.clear()


def commit_drag(
    document: TimelineDocument,
    state: DragState,
    *,
    min_elapsed: float = MIN_ELAPSED,
) -> TimelineDocument:
    """Write a finished drag's candidate start into the document."""
    target = state.target
    if target.kind == "one_shot":
        if target.block_id is None:
            logger.warning("One-shot drag without a block id; nothing committed")
            return document
        return set_one_shot_start(
            document, target.stream_id, target.block_id, state.current_start
        )

    stream = document.find_stream(target.stream_id)
    if stream is None:
        logger.warning(f"Drag target stream {target.stream_id!r} no longer exists")
        return document
    new_start = max(
        min_elapsed, state.current_start - target.index * stream.repeating.gap
    )
    return set_repeating_start(document, target.stream_id, new_start)
