import numpy as np
import pytest

from timeline_planner.models import ZOOM_LEVELS
from timeline_planner.zoom import (
    clamp_zoom_index,
    get_zoom_level,
    gridline_count,
    gridline_positions,
    scale_markers,
    track_pixel_width,
    zoom_in,
    zoom_out,
)


def test_gridlines_stop_at_last_multiple():
    positions = gridline_positions(10, 95)
    assert positions.shape == (10,)
    np.testing.assert_allclose(positions * 95, np.arange(0, 100, 10))
    assert positions.max() < 1.0


def test_gridlines_include_window_end():
    positions = gridline_positions(10, 100)
    assert positions.size == 11
    assert positions[-1] == pytest.approx(1.0)


def test_fine_tick_tolerates_float_error():
    assert gridline_count(0.1, 210) == 2101


@pytest.mark.parametrize("tick, total", [(0, 210), (-1, 210), (10, 0)])
def test_degenerate_gridlines_are_empty(tick, total):
    assert gridline_positions(tick, total).size == 0


def test_scale_markers_label_remaining_time():
    positions, labels = scale_markers(10, 210)
    assert positions.size == len(labels) == 22
    assert labels[0] == "3:30"
    assert labels[1] == "3:20"
    assert labels[-1] == "0:00"


def test_zoom_index_clamping():
    last = len(ZOOM_LEVELS) - 1
    assert clamp_zoom_index(-3) == 0
    assert clamp_zoom_index(99) == last
    assert zoom_in(last) == last
    assert zoom_out(0) == 0
    assert zoom_in(0) == 1
    assert get_zoom_level(99) is ZOOM_LEVELS[last]


def test_track_pixel_width():
    assert track_pixel_width(ZOOM_LEVELS[2], 1200) == 6000
