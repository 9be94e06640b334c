"""Persistence of the timeline document as a JSON file.

The store keeps exactly one document per file and overwrites it on every
save. Loading never fails: a missing or unreadable file falls back to the
default document and the problem is only logged.
"""

import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from timeline_planner.constants import DEFAULT_CHART_TITLE, DEFAULT_TOTAL_DURATION
from timeline_planner.document import default_document, default_streams
from timeline_planner.models.core_models import TimelineDocument

logger = logging.getLogger(__name__)

STORAGE_FILENAME = "time-gantt-data-v1.json"


def default_storage_dir() -> Path:
    """Directory holding the saved document.

    Uses ``TIMELINE_PLANNER_HOME`` when set, otherwise a hidden directory
    in the user's home.
    """
    base_dir = os.environ.get("TIMELINE_PLANNER_HOME")
    if base_dir:
        return Path(base_dir)
    return Path.home() / ".timeline_planner"


class DocumentStore:
    """Loads and saves the timeline document.

    Attributes:
        path: Location of the JSON file.
    """

    def __init__(self, path: str | Path | None = None):
        """Initialize the store.

        Args:
            path: JSON file to use. If None, ``STORAGE_FILENAME`` inside
                  ``default_storage_dir()``.
        """
        if path is None:
            path = default_storage_dir() / STORAGE_FILENAME
        self.path = Path(path)

    def load(self) -> TimelineDocument:
        """Read the saved document, or the default one if there is none.

        Missing fields are filled in: an absent, non-numeric or
        non-positive total duration becomes the default length, and an
        empty stream list is replaced by the default streams.

        Returns:
            The loaded document, never None.
        """
        if not self.path.exists():
            logger.info(f"No saved document at {self.path}; using defaults")
            return default_document()

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(raw, dict):
                raise ValueError("saved document is not a JSON object")
            total = raw.get("totalDuration")
            if isinstance(total, bool) or not isinstance(total, (int, float)):
                total = None
            if total is None or not total > 0:
                raw["totalDuration"] = DEFAULT_TOTAL_DURATION
            if not raw.get("chartTitle"):
                raw["chartTitle"] = DEFAULT_CHART_TITLE
            document = TimelineDocument.model_validate(raw)
        except (OSError, ValueError, ValidationError) as e:
            logger.error(f"Failed to load document from {self.path}: {e}")
            return default_document()

        if not document.streams:
            document = document.model_copy(update={"streams": default_streams()})
        return document

    def save(self, document: TimelineDocument) -> bool:
        """Write the document, replacing any previous one.

        Args:
            document: Document to persist.

        Returns:
            True on success, False if the write failed.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            payload = document.model_dump_json(by_alias=True, indent=2)

            # Write atomically to prevent partial reads
            temp_path = self.path.with_name(self.path.name + ".tmp")
            temp_path.write_text(payload, encoding="utf-8")
            os.replace(temp_path, self.path)
        except OSError as e:
            logger.error(f"Failed to save document to {self.path}: {e}")
            return False
        return True
