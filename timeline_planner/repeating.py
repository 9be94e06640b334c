"""Expansion of repeating actions into concrete occurrences.

A ``RepeatingEventSpec`` describes an unbounded arithmetic progression of
occurrences. Expansion bounds it by the countdown window and by a hard
occurrence cap, after flooring the gap and duration so that degenerate
specs cannot produce runaway or empty sequences.
"""

from timeline_planner.constants import (
    DURATION_FLOOR,
    GAP_FLOOR,
    MAX_OCCURRENCES,
    MIN_ELAPSED,
)
from timeline_planner.models.core_models import Occurrence, RepeatingEventSpec


def expand_repeating(
    spec: RepeatingEventSpec,
    total_duration: float,
    *,
    min_elapsed: float = MIN_ELAPSED,
    gap_floor: float = GAP_FLOOR,
    duration_floor: float = DURATION_FLOOR,
    max_occurrences: int = MAX_OCCURRENCES,
) -> list[Occurrence]:
    """Expand a repeating action into its occurrences.

    Occurrence ``i`` starts at ``max(min_elapsed, spec.start) + i * gap``.
    Generation stops at the first occurrence whose start is at or beyond
    ``total_duration + duration + cast_delay``; that occurrence is not
    included. Occurrences starting after the window end but before that
    bound are kept, the renderer decides whether they are visible.

    Args:
        spec: Repeating action definition.
        total_duration: Countdown window length.
        min_elapsed: Floor applied to the first start.
        gap_floor: Minimum spacing between occurrences.
        duration_floor: Minimum occurrence duration.
        max_occurrences: Upper bound on the number of occurrences.

    Returns:
        Occurrences ordered by index.
    """
    duration = max(spec.duration, duration_floor)
    cast_delay = spec.cast_delay
    stop_at = total_duration + duration + cast_delay

    occurrences: list[Occurrence] = []
    for index in range(max_occurrences):
        start = occurrence_start(
            spec, index, min_elapsed=min_elapsed, gap_floor=gap_floor
        )
        if start >= stop_at:
            break
        occurrences.append(
            Occurrence(
                index=index, start=start, cast_delay=cast_delay, duration=duration
            )
        )
    return occurrences


def occurrence_start(
    spec: RepeatingEventSpec,
    index: int,
    *,
    min_elapsed: float = MIN_ELAPSED,
    gap_floor: float = GAP_FLOOR,
) -> float:
    """Start of occurrence ``index`` with the start and gap floors applied."""
    return max(min_elapsed, spec.start) + index * max(spec.gap, gap_floor)
