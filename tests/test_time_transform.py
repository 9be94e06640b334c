import pytest

from timeline_planner.time_transform import (
    format_time,
    format_time_fixed,
    from_remaining,
    parse_time_parts,
    parse_time_text,
    to_remaining,
)


def test_to_remaining():
    assert to_remaining(50, 210) == 160
    assert to_remaining(210, 210) == 0


def test_from_remaining_floors_start():
    assert from_remaining(100, 210) == 110
    assert from_remaining(209, 210) == 2.0
    assert from_remaining(300, 210) == 2.0


@pytest.mark.parametrize("remaining", [0.0, 15.25, 50.5, 180.0, 208.0])
def test_remaining_round_trip(remaining):
    elapsed = from_remaining(remaining, 210)
    assert to_remaining(elapsed, 210) == pytest.approx(remaining)


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (210, "3:30"),
        (0, "0:00"),
        (65.5, "1:05.500"),
        (-1.5, "-0:01.500"),
        (3600, "60:00"),
        (59.9996, "1:00.000"),
        (1.0004, "0:01.000"),
        (-0.0001, "-0:00.000"),
        (-30, "-0:30"),
    ],
)
def test_format_time(seconds, expected):
    assert format_time(seconds) == expected


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (208, "3:28.000"),
        (0.25, "0:00.250"),
        (-12, "-0:12.000"),
    ],
)
def test_format_time_fixed(seconds, expected):
    assert format_time_fixed(seconds) == expected


def test_parse_time_parts():
    assert parse_time_parts("1", "23", "250") == pytest.approx(83.25)
    assert parse_time_parts("", None, "") == 0
    assert parse_time_parts("x", "10", "y") == 10


def test_parse_time_parts_clamps():
    assert parse_time_parts("5", "0", "0", maximum=208) == 208
    assert parse_time_parts("0", "0", "0", minimum=2) == 2


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1:23.250", 83.25),
        ("90", 90.0),
        ("1:05", 65.0),
        ("0:01.5", 1.5),
        ("", 0.0),
    ],
)
def test_parse_time_text(text, expected):
    assert parse_time_text(text) == pytest.approx(expected)


def test_parse_time_text_clamps_to_maximum():
    assert parse_time_text("9:00", maximum=208) == 208
