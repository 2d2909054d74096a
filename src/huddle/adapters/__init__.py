"""Adapters - I/O implementations of ports."""

from .file_snapshot import FileSnapshotSource, SnapshotError
from .http_snapshot import HttpSnapshotSource

__all__ = [
    "FileSnapshotSource",
    "HttpSnapshotSource",
    "SnapshotError",
]
