import pytest

from timeline_planner.document import default_document
from timeline_planner.models.core_models import (
    EffectInterval,
    EventStream,
    OneShotBlock,
    RepeatingEventSpec,
    TimelineDocument,
)


@pytest.fixture
def document():
    # Six streams with abutting one-shot blocks, total 210 s
    return default_document()


@pytest.fixture
def two_stream_document():
    # Two checked streams whose blocks overlap on [20, 30)
    return TimelineDocument(
        total_duration=200,
        chart_title="Test chart",
        streams=[
            EventStream(
                id="a",
                name="Alpha",
                one_shots=[OneShotBlock(id="a1", start=10, duration=20)],
                repeating=RepeatingEventSpec(start=2, gap=30, duration=10),
            ),
            EventStream(
                id="b",
                name="Bravo",
                one_shots=[OneShotBlock(id="b1", start=20, duration=30)],
                repeating=RepeatingEventSpec(start=5, gap=50, duration=5),
            ),
        ],
    )


@pytest.fixture
def repeating_spec():
    return RepeatingEventSpec(start=2, cast_delay=0, gap=30, duration=10)


@pytest.fixture
def disjoint_intervals():
    # Three mutually disjoint active windows
    return [
        EffectInterval(start=0, duration=5),
        EffectInterval(start=10, duration=5),
        EffectInterval(start=20, cast_delay=2, duration=5),
    ]
