"""Elapsed/remaining time conversion and countdown formatting.

Elapsed time runs from 0 at the window start to ``total`` at the window
end; remaining time is what a countdown clock shows. Start times derived
from user input are floored at ``MIN_ELAPSED`` so they stay usable.
"""

from timeline_planner.constants import MIN_ELAPSED


def to_remaining(elapsed: float, total: float) -> float:
    """Convert an elapsed time to the remaining time on the countdown."""
    return total - elapsed


def from_remaining(
    remaining: float, total: float, min_elapsed: float = MIN_ELAPSED
) -> float:
    """Convert a remaining time back to an elapsed start time.

    Results below the floor are raised to it rather than rejected, since
    a remaining time close to ``total`` is a legal entry.

    Args:
        remaining: Seconds left on the countdown.
        total: Countdown window length.
        min_elapsed: Earliest usable elapsed time.

    Returns:
        Elapsed time, never below ``min_elapsed``.
    """
    return max(min_elapsed, total - remaining)


def _split(seconds: float) -> tuple[str, int, int, int]:
    # Milliseconds are rounded before splitting so 59.9996 carries into the minute
    total_ms = round(abs(seconds) * 1000)
    sign = "-" if seconds < 0 else ""
    minutes, rest = divmod(total_ms, 60_000)
    secs, millis = divmod(rest, 1000)
    return sign, minutes, secs, millis


def format_time(seconds: float) -> str:
    """Format seconds as ``M:SS``, or ``M:SS.mmm`` when not a whole second.

    Only an exactly whole input drops the milliseconds, so ``1.0004`` gives
    ``"0:01.000"``. Minutes are not wrapped at 60 and every negative value
    carries a sign.

    Args:
        seconds: Time value to format.

    Returns:
        Countdown-style string such as ``"3:30"`` or ``"-0:01.500"``.
    """
    sign, minutes, secs, millis = _split(seconds)
    if float(seconds).is_integer():
        return f"{sign}{minutes}:{secs:02d}"
    return f"{sign}{minutes}:{secs:02d}.{millis:03d}"


def format_time_fixed(seconds: float) -> str:
    """Format seconds as ``M:SS.mmm`` with the milliseconds always shown."""
    sign, minutes, secs, millis = _split(seconds)
    return f"{sign}{minutes}:{secs:02d}.{millis:03d}"


def _to_int(part: str | int | None) -> int:
    if part is None:
        return 0
    try:
        return int(str(part).strip() or 0)
    except ValueError:
        return 0


def parse_time_parts(
    minutes: str | int | None,
    seconds: str | int | None,
    millis: str | int | None,
    minimum: float = 0.0,
    maximum: float | None = None,
) -> float:
    """Combine minute, second and millisecond fields into seconds.

    Blank or non-numeric fields count as zero. The result is clamped to
    ``[minimum, maximum]``.

    Args:
        minutes: Minute field.
        seconds: Second field.
        millis: Millisecond field.
        minimum: Lower bound of the result.
        maximum: Optional upper bound of the result.

    Returns:
        Total seconds within the bounds.
    """
    total = _to_int(minutes) * 60 + _to_int(seconds) + _to_int(millis) / 1000
    total = max(total, minimum)
    if maximum is not None:
        total = min(total, maximum)
    return total


def parse_time_text(
    text: str, minimum: float = 0.0, maximum: float | None = None
) -> float:
    """Parse ``"M:SS.mmm"`` (any part optional) into clamped seconds.

    ``"90"`` is read as 90 seconds and ``"1:05"`` as 65 seconds. The
    millisecond part is read as a decimal fraction, so ``"0:01.5"`` is
    1.5 seconds.
    """
    text = (text or "").strip()
    minutes, _, rest = text.rpartition(":")
    secs, _, frac = rest.partition(".")
    millis = (frac.strip() + "000")[:3] if frac.strip().isdigit() else "0"
    return parse_time_parts(minutes, secs, millis, minimum, maximum)
