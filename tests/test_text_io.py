import pytest

from timeline_planner.constants import STREAM_COLORS
from timeline_planner.document import set_one_shot_start
from timeline_planner.text_io import (
    ImportFormatError,
    TimelineError,
    export_callouts,
    export_text,
    parse_import_line,
    parse_import_text,
)


def test_parse_import_text(document):
    doc = parse_import_text("Striker1, 2, 0, 20, 30\nHealer, 2, 2.5, 15, 60", document)
    assert [s.name for s in doc.streams] == ["Striker1", "Healer"]
    healer = doc.streams[1].repeating
    assert healer.cast_delay == 2.5
    assert healer.duration == 15
    assert healer.gap == 60
    assert doc.streams[1].one_shots == []
    assert doc.total_duration == document.total_duration
    assert doc.chart_title == document.chart_title


def test_missing_fields_use_defaults():
    spec = parse_import_line("Tank", 0).repeating
    assert (spec.start, spec.cast_delay, spec.duration, spec.gap) == (2.0, 0.0, 20.0, 30.0)


def test_unparsable_fields_use_defaults():
    spec = parse_import_line("Tank, abc, , inf, 45", 0).repeating
    assert spec.start == 2.0
    assert spec.cast_delay == 0.0
    assert spec.duration == 20.0
    assert spec.gap == 45


def test_blank_name_gets_fallback():
    assert parse_import_line(", 5", 2).name == "Task 3"


def test_comments_and_blank_lines_are_skipped():
    doc = parse_import_text("# name, start, cast, duration, gap\n\nA, 5\n\n")
    assert [s.name for s in doc.streams] == ["A"]


def test_colours_cycle():
    text = "\n".join(f"S{i}" for i in range(len(STREAM_COLORS) + 1))
    doc = parse_import_text(text)
    assert doc.streams[-1].color == STREAM_COLORS[0]


@pytest.mark.parametrize("text", ["", "\n\n", "# only a comment"])
def test_empty_import_raises(text):
    with pytest.raises(ImportFormatError):
        parse_import_text(text)


def test_import_error_is_timeline_error():
    assert issubclass(ImportFormatError, TimelineError)


def test_export_callouts(document):
    assert export_callouts(document) == [
        "3:28.000 Striker1",
        "3:00.000 Striker2",
        "2:15.000 Striker3",
        "1:30.000 Striker4",
        "0:45.000 Special1",
        "0:15.000 Special2",
    ]


def test_export_ties_keep_stream_order(document):
    doc = set_one_shot_start(document, "stream-6", "block-6", 2.0)
    callouts = export_callouts(doc)
    assert callouts[:2] == ["3:28.000 Striker1", "3:28.000 Special2"]


def test_export_text(document):
    lines = export_text(document).split("\n")
    assert lines[0] == "Chart 1"
    assert lines[1] == ""
    assert lines[2] == "3:28.000 Striker1"
    assert len(lines) == 8
