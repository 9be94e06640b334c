import pytest

from timeline_planner.models import EventStream, OneShotBlock


@pytest.fixture
def valid_block():
    return OneShotBlock(id="block-1", start=10.0, cast_delay=2.5, duration=20.0)


@pytest.fixture
def valid_stream(valid_block):
    return EventStream(id="stream-1", name="Striker1", one_shots=[valid_block])
