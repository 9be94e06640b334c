"""Overlap detection across one-shot effects.

Overlaps are found with an event sweep: every active window contributes
a +1 event where it opens and a -1 event where it closes. Sorting the
events and tracking the running count yields the maximal spans where two
or more windows are active. The result is recomputed from scratch for
every call.
"""

from collections.abc import Iterable

from timeline_planner.constants import OVERLAP_EPSILON
from timeline_planner.models.core_models import (
    EffectInterval,
    EventStream,
    OverlapRange,
)


def collect_overlap_intervals(streams: Iterable[EventStream]) -> list[EffectInterval]:
    """Gather the intervals that take part in overlap checking.

    Only one-shot blocks of streams with ``check_overlap`` set are used;
    repeating occurrences never are.
    """
    intervals: list[EffectInterval] = []
    for stream in streams:
        if not stream.check_overlap:
            continue
        intervals.extend(stream.one_shots)
    return intervals


def detect_overlaps(
    intervals: Iterable[EffectInterval],
    total_duration: float | None = None,
    *,
    epsilon: float = OVERLAP_EPSILON,
) -> list[OverlapRange]:
    """Find the spans where at least two active windows coincide.

    At equal timestamps closing events are processed before opening ones,
    so a window ending exactly where another begins does not overlap it.
    Intervals with a non-positive duration are ignored.

    Args:
        intervals: Effect intervals to check.
        total_duration: Countdown window length. It bounds the domain the
            caller works in and does not affect the sweep.
        epsilon: Overlaps must be wider than this to be reported.

    Returns:
        Disjoint overlap ranges sorted by start.
    """
    events: list[tuple[float, int]] = []
    for interval in intervals:
        if interval.duration <= 0:
            continue
        events.append((interval.effect_start, 1))
        events.append((interval.effect_end, -1))

    # Ties: weight -1 sorts before +1
    events.sort()

    overlaps: list[OverlapRange] = []
    count = 0
    overlap_start: float | None = None
    for time, weight in events:
        previous = count
        count += weight
        if previous < 2 <= count:
            overlap_start = time
        elif count < 2 <= previous and overlap_start is not None:
            if time > overlap_start + epsilon:
                overlaps.append(OverlapRange(start=overlap_start, end=time))
            overlap_start = None

    return overlaps
