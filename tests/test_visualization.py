import matplotlib.pyplot as plt
import pytest
from matplotlib.figure import Figure

from timeline_planner.models import TimelineView
from timeline_planner.pipeline import build_timeline_view
from timeline_planner.visualization import create_timeline_figure


def test_figure_has_two_lanes_per_stream(document):
    fig = create_timeline_figure(build_timeline_view(document))
    assert isinstance(fig, Figure)
    (ax,) = fig.axes
    labels = [t.get_text() for t in ax.get_yticklabels()]
    assert len(labels) == 12
    assert labels[:2] == ["Striker1", "repeat"]
    assert ax.get_xlim() == (0, 210)


def test_figure_width_follows_zoom(document):
    fig = create_timeline_figure(build_timeline_view(document, zoom_index=1))
    assert fig.get_size_inches()[0] == pytest.approx(24)


def test_figure_width_is_capped(document):
    fig = create_timeline_figure(build_timeline_view(document, zoom_index=4))
    assert fig.get_size_inches()[0] == pytest.approx(80)


def test_tick_labels_are_thinned(document):
    view = build_timeline_view(document, zoom_index=4)
    ticks = create_timeline_figure(view).axes[0].get_xticks()
    assert 0 < len(ticks) < view.grid.positions.size


def test_empty_view():
    fig = create_timeline_figure(TimelineView(total_duration=210))
    texts = [t.get_text() for t in fig.axes[0].texts]
    assert texts == ["No streams"]


def test_overlaps_render(two_stream_document):
    fig = create_timeline_figure(build_timeline_view(two_stream_document))
    assert len(fig.axes) == 1


def test_figures_are_not_registered_with_pyplot(document):
    before = len(plt.get_fignums())
    for _ in range(5):
        create_timeline_figure(build_timeline_view(document))
    create_timeline_figure(TimelineView(total_duration=210))
    assert len(plt.get_fignums()) == before
