"""Unique-duration toggling for effect lengths.

Some actions last longer when a "unique" modifier is active. Toggling the
modifier on multiplies the stored duration by a fixed factor and toggling
it off divides it back, each time rounding to hundredths.
"""

from timeline_planner.constants import UNIQUE_FACTOR


def scale_unique_duration(
    duration: float, enabling: bool, factor: float = UNIQUE_FACTOR
) -> float:
    """Rescale a duration for a toggled unique modifier.

    Enabling then disabling returns to within 0.01 of the starting value;
    repeated toggle pairs do not accumulate.

    Args:
        duration: Current duration in seconds.
        enabling: True when the modifier is being switched on.
        factor: Scale factor, greater than 1.

    Returns:
        The rescaled duration rounded to 2 decimal places.
    """
    if enabling:
        scaled = duration * factor
    else:
        scaled = duration / factor
    return round(scaled, 2)
