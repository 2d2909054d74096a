"""File-based snapshot adapter."""

import json
import logging
from pathlib import Path

from huddle.core.deadlines import DeadlineSources, DeadlineType

logger = logging.getLogger(__name__)


class SnapshotError(Exception):
    """Raised when a snapshot cannot be loaded."""

    pass


def sources_from_document(document: object) -> DeadlineSources:
    """Validate a decoded snapshot document and build DeadlineSources."""
    if not isinstance(document, dict):
        raise SnapshotError("Snapshot must be a JSON object")

    for deadline_type in DeadlineType:
        name = f"{deadline_type.value}s"
        collection = document.get(name)
        if collection is None:
            continue
        if not isinstance(collection, list):
            raise SnapshotError(f"Snapshot field '{name}' must be a list")
        if not all(isinstance(r, dict) for r in collection):
            raise SnapshotError(f"Snapshot field '{name}' must contain objects")

    return DeadlineSources.from_dict(document)


class FileSnapshotSource:
    """
    Reads records from a JSON snapshot on disk.

    Implements DeadlineSource protocol.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def fetch_sources(self) -> DeadlineSources:
        """Load all four collections from the snapshot file."""
        if not self.path.exists():
            raise SnapshotError(f"Snapshot file not found: {self.path}")

        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SnapshotError(f"Cannot read {self.path}: {e}") from e

        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise SnapshotError(f"Invalid JSON in {self.path}: {e}") from e

        logger.debug(f"Loaded snapshot from {self.path}")
        return sources_from_document(document)
