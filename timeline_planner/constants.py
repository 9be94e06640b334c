"""Fixed constants shared by the timeline engine."""

# Earliest usable elapsed time; the zero origin is never a valid start.
MIN_ELAPSED = 2.0

# Multiplier applied when an effect duration is toggled to "unique".
UNIQUE_FACTOR = 1.19

# Floors applied before expanding a repeating action
GAP_FLOOR = 0.1
DURATION_FLOOR = 0.001
MAX_OCCURRENCES = 1000

# Overlaps narrower than this are boundary artifacts
OVERLAP_EPSILON = 0.001

DEFAULT_TOTAL_DURATION = 210.0
DEFAULT_CHART_TITLE = "Chart 1"

# Fallback values for plain-text import fields
IMPORT_DEFAULT_CAST_DELAY = 0.0
IMPORT_DEFAULT_DURATION = 20.0
IMPORT_DEFAULT_GAP = 30.0

# Matplotlib colours cycled over event streams
STREAM_COLORS = [
    "tab:blue",
    "tab:green",
    "tab:cyan",
    "tab:purple",
    "tab:pink",
    "tab:red",
]
