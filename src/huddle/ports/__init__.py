"""Ports - interfaces/protocols for external dependencies."""

from .deadline_source import DeadlineSource

__all__ = [
    "DeadlineSource",
]
