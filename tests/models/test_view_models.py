import numpy as np

from timeline_planner.models import BarView, GridView, TimelineView


def test_gridview_defaults():
    g = GridView()
    assert isinstance(g.positions, np.ndarray)
    assert g.positions.size == 0
    assert g.labels == []


def test_timelineview_defaults():
    v = TimelineView(total_duration=210)
    assert v.rows == []
    assert v.overlaps == []
    assert v.dragging is False
    assert v.grid.positions.size == 0


def test_barview_flags_default():
    bar = BarView(start=2, duration=10)
    assert bar.draggable is True
    assert bar.overflowing is False
    assert bar.block_id is None and bar.index is None
