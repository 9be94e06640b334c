"""Tests for document persistence.

These tests check the load and save contracts of the JSON store against
real files in a temporary directory.
"""

import json
from pathlib import Path

import pytest

from timeline_planner.document import default_document, rename_stream
from timeline_planner.storage import STORAGE_FILENAME, DocumentStore, default_storage_dir


def test_load_missing_file_gives_defaults(tmp_path):
    """Behavior: A first run without a saved file starts from the defaults."""
    store = DocumentStore(tmp_path / "doc.json")
    assert store.load() == default_document()


def test_save_and_load_round_trip(tmp_path):
    store = DocumentStore(tmp_path / "nested" / "doc.json")
    doc = rename_stream(default_document(), "stream-1", "Opener")
    assert store.save(doc)
    assert store.load() == doc


def test_saved_json_uses_camel_case(tmp_path):
    path = tmp_path / "doc.json"
    DocumentStore(path).save(default_document())
    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["totalDuration"] == 210
    assert raw["chartTitle"] == "Chart 1"
    assert "castDelay" in raw["streams"][0]["oneShots"][0]
    assert "checkOverlap" in raw["streams"][0]
    assert not (tmp_path / "doc.json.tmp").exists()


def test_corrupt_file_gives_defaults(tmp_path):
    """Behavior: An unreadable file never stops the editor from loading."""
    path = tmp_path / "doc.json"
    path.write_text("{not json", encoding="utf-8")
    assert DocumentStore(path).load() == default_document()


def test_invalid_document_gives_defaults(tmp_path):
    path = tmp_path / "doc.json"
    path.write_text(json.dumps({"streams": [{"name": "no id"}]}), encoding="utf-8")
    assert DocumentStore(path).load() == default_document()


def test_missing_fields_are_filled(tmp_path):
    """Behavior: Partial documents are completed rather than rejected."""
    path = tmp_path / "doc.json"
    path.write_text(json.dumps({"totalDuration": 240, "streams": []}), encoding="utf-8")
    doc = DocumentStore(path).load()
    assert doc.total_duration == 240
    assert doc.chart_title == "Chart 1"
    assert len(doc.streams) == 6


def test_zero_total_duration_is_replaced(tmp_path):
    path = tmp_path / "doc.json"
    path.write_text(json.dumps({"totalDuration": 0}), encoding="utf-8")
    assert DocumentStore(path).load().total_duration == 210


@pytest.mark.parametrize("total", [-30, "long", None, True])
def test_bad_total_duration_keeps_streams(tmp_path, total):
    """Behavior: Only the countdown length falls back; saved streams survive."""
    saved = rename_stream(default_document(), "stream-1", "Opener")
    raw = json.loads(saved.model_dump_json(by_alias=True))
    raw["totalDuration"] = total
    path = tmp_path / "doc.json"
    path.write_text(json.dumps(raw), encoding="utf-8")

    doc = DocumentStore(path).load()
    assert doc.total_duration == 210
    assert doc.streams[0].name == "Opener"


def test_save_failure_returns_false(tmp_path):
    # The target path is an existing directory
    target = tmp_path / "occupied"
    target.mkdir()
    assert DocumentStore(target).save(default_document()) is False


def test_storage_dir_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("TIMELINE_PLANNER_HOME", str(tmp_path))
    assert default_storage_dir() == tmp_path
    assert DocumentStore().path == tmp_path / STORAGE_FILENAME


def test_storage_dir_default(monkeypatch):
    monkeypatch.delenv("TIMELINE_PLANNER_HOME", raising=False)
    assert default_storage_dir() == Path.home() / ".timeline_planner"
