import pytest

from timeline_planner.drag import (
    DragSession,
    LatestValueMailbox,
    commit_drag,
    map_drag,
    pixels_to_seconds,
)
from timeline_planner.models import DragState, DragTarget


def _find_block(document, stream_id, block_id):
    stream = document.find_stream(stream_id)
    return next(b for b in stream.one_shots if b.id == block_id)


def test_pixels_to_seconds():
    assert pixels_to_seconds(100, 1000, 200) == pytest.approx(20)
    assert pixels_to_seconds(100, 0, 200) == 0


def test_map_drag():
    assert map_drag(50, 100, 1000, 200) == pytest.approx(70)


def test_map_drag_floors_at_min_elapsed():
    assert map_drag(50, -1000, 1000, 200) == 2.0


def test_map_drag_has_no_ceiling():
    assert map_drag(190, 500, 1000, 200) == pytest.approx(290)


def test_map_drag_scales_with_zoom():
    # Same pixel movement is worth half as much on a track twice as wide
    assert map_drag(50, 100, 2000, 200) == pytest.approx(60)


def test_mailbox_keeps_latest():
    box = LatestValueMailbox()
    assert not box.pending
    for value in (1, 2, 3):
        box.post(value)
    assert box.pending
    assert box.take() == 3
    assert box.take() is None
    assert not box.pending


def test_mailbox_clear():
    box = LatestValueMailbox()
    box.post(5)
    box.clear()
    assert box.take() is None


def test_session_one_shot_lifecycle(two_stream_document):
    session = DragSession()
    target = DragTarget(stream_id="a", kind="one_shot", block_id="a1")
    assert session.begin(target, 100, 10, 1000, 200)
    assert session.active

    session.move(300)
    session.move(400)
    state = session.flush()
    assert state.current_start == pytest.approx(70)
    assert state.original_start == 10

    doc = session.end(two_stream_document)
    assert not session.active
    assert _find_block(doc, "a", "a1").start == pytest.approx(70)
    assert _find_block(two_stream_document, "a", "a1").start == 10


def test_flush_without_move_keeps_state():
    session = DragSession()
    target = DragTarget(stream_id="a", kind="one_shot", block_id="a1")
    session.begin(target, 0, 10, 1000, 200)
    assert session.flush().current_start == 10


def test_move_and_flush_when_idle():
    session = DragSession()
    session.move(50)
    assert session.flush() is None


def test_second_begin_is_ignored():
    session = DragSession()
    first = DragTarget(stream_id="a", kind="one_shot", block_id="a1")
    second = DragTarget(stream_id="b", kind="one_shot", block_id="b1")
    assert session.begin(first, 0, 10, 1000, 200)
    assert not session.begin(second, 0, 20, 1000, 200)
    assert session.state.target == first


def test_cancel_leaves_document(two_stream_document):
    session = DragSession()
    target = DragTarget(stream_id="a", kind="one_shot", block_id="a1")
    session.begin(target, 0, 10, 1000, 200)
    session.move(100)
    session.cancel()
    assert not session.active
    assert session.end(two_stream_document) is two_stream_document


def test_repeating_commit_uses_occurrence_index(two_stream_document):
    session = DragSession()
    target = DragTarget(stream_id="a", kind="repeating", index=2)
    session.begin(target, 0, 62, 1000, 200)
    session.move(50)
    doc = session.end(two_stream_document)
    # Occurrence 2 moved to 72, so occurrence 0 now starts at 72 - 2 * 30
    assert doc.find_stream("a").repeating.start == pytest.approx(12)


def test_repeating_commit_is_floored(two_stream_document):
    session = DragSession()
    target = DragTarget(stream_id="a", kind="repeating", index=2)
    session.begin(target, 0, 62, 1000, 200)
    session.move(-1000)
    doc = session.end(two_stream_document)
    assert doc.find_stream("a").repeating.start == 2.0


def test_commit_drag_unknown_stream(two_stream_document):
    state = DragState(
        target=DragTarget(stream_id="missing", kind="repeating"),
        origin_x=0,
        original_start=2,
        current_start=20,
    )
    assert commit_drag(two_stream_document, state) is two_stream_document
