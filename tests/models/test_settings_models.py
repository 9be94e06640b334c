import pytest
from pydantic import ValidationError

from timeline_planner.models import (
    DURATION_OPTIONS,
    ZOOM_LEVELS,
    TimelineSettings,
    ZoomLevel,
)


def test_timeline_settings_defaults():
    s = TimelineSettings()
    assert s.min_elapsed == 2.0
    assert s.unique_factor == pytest.approx(1.19)
    assert s.gap_floor == pytest.approx(0.1)
    assert s.duration_floor == pytest.approx(0.001)
    assert s.max_occurrences == 1000


@pytest.mark.parametrize(
    "kwargs",
    [
        {"unique_factor": 1.0},
        {"gap_floor": 0},
        {"max_occurrences": 0},
        {"min_elapsed": -1},
    ],
)
def test_timeline_settings_validation_raises(kwargs):
    with pytest.raises(ValidationError):
        TimelineSettings(**kwargs)


def test_zoom_levels_coarse_to_fine():
    magnifications = [level.magnification for level in ZOOM_LEVELS]
    ticks = [level.tick_interval for level in ZOOM_LEVELS]
    assert magnifications == sorted(magnifications)
    assert ticks == sorted(ticks, reverse=True)
    assert ZOOM_LEVELS[0].label == "x1 (10s)"


def test_zoom_level_rejects_zero_tick():
    with pytest.raises(ValidationError):
        ZoomLevel(magnification=1, tick_interval=0)


def test_duration_options():
    assert sorted(DURATION_OPTIONS.values()) == [210.0, 240.0, 270.0]
