"""Functional core - pure business logic with no I/O."""

from .deadlines import (
    DeadlineItem,
    DeadlineSources,
    DeadlineStatus,
    DeadlineType,
    aggregate_deadlines,
    filter_by_status,
    split_by_status,
)
from .splits import (
    ExpenseSplit,
    SplitError,
    SplitParticipant,
    add_participant,
    create_split,
    remove_participant,
    reset_split,
    set_share,
)
from .report import format_deadline_sections, format_split_lines

__all__ = [
    # Deadlines
    "DeadlineItem",
    "DeadlineSources",
    "DeadlineStatus",
    "DeadlineType",
    "aggregate_deadlines",
    "filter_by_status",
    "split_by_status",
    # Splits
    "ExpenseSplit",
    "SplitError",
    "SplitParticipant",
    "add_participant",
    "create_split",
    "remove_participant",
    "reset_split",
    "set_share",
    # Reports
    "format_deadline_sections",
    "format_split_lines",
]
