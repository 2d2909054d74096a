"""Deadline source interface."""

from typing import Protocol

from huddle.core.deadlines import DeadlineSources


class DeadlineSource(Protocol):
    """Interface for loading already-fetched project, update, message and task records."""

    def fetch_sources(self) -> DeadlineSources:
        """Load all four collections."""
        ...
