"""Pure deadline aggregation logic - no I/O dependencies."""

import logging
import math
import re
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone, tzinfo
from enum import Enum
from typing import Any, Iterable, Mapping

logger = logging.getLogger(__name__)


class DeadlineType(Enum):
    """Kind of record a deadline was derived from."""

    PROJECT = "project"
    UPDATE = "update"
    MESSAGE = "message"
    TASK = "task"

    @property
    def date_field(self) -> str:
        return _SOURCE_FIELDS[self][0]

    @property
    def title_field(self) -> str:
        return _SOURCE_FIELDS[self][1]

    @property
    def label(self) -> str:
        """Human-readable label for display."""
        return _SOURCE_FIELDS[self][2]

    def link_for(self, record_id: str) -> str:
        return f"/{self.value}s/{record_id}"


# type -> (date field, title field, label)
_SOURCE_FIELDS = {
    DeadlineType.PROJECT: ("deadline", "name", "Project Deadline"),
    DeadlineType.UPDATE: ("date", "title", "Update Due"),
    DeadlineType.MESSAGE: ("due_date", "subject", "Message Response Due"),
    DeadlineType.TASK: ("due_date", "title", "Task Due"),
}


_DATE_ONLY = re.compile(r"\d{4}-?\d{2}-?\d{2}")


class DeadlineStatus(Enum):
    UPCOMING = "upcoming"
    PAST = "past"


@dataclass
class DeadlineItem:
    """A normalized view of any dated record."""

    id: str
    title: str
    type: DeadlineType
    date: datetime
    status: DeadlineStatus
    link: str

    @property
    def label(self) -> str:
        return self.type.label

    def days_until(self, as_of: datetime | None = None) -> int:
        """Days until the deadline, rounded up (negative if past)."""
        as_of = as_of or datetime.now(timezone.utc)
        seconds = (self.date - as_of).total_seconds()
        return math.ceil(seconds / 86400)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "type": self.type.value,
            "date": self.date.isoformat(),
            "status": self.status.value,
            "link": self.link,
        }


@dataclass(frozen=True)
class DeadlineSources:
    """The four source collections, as already fetched."""

    projects: tuple[Mapping[str, Any], ...] = field(default_factory=tuple)
    updates: tuple[Mapping[str, Any], ...] = field(default_factory=tuple)
    messages: tuple[Mapping[str, Any], ...] = field(default_factory=tuple)
    tasks: tuple[Mapping[str, Any], ...] = field(default_factory=tuple)

    def records(self, deadline_type: DeadlineType) -> tuple[Mapping[str, Any], ...]:
        """Records for a given deadline type."""
        return getattr(self, f"{deadline_type.value}s")

    @classmethod
    def from_dict(cls, data: Mapping[str, Iterable[Mapping[str, Any]]]) -> "DeadlineSources":
        """Create sources from a snapshot mapping. Missing keys are empty."""
        return cls(
            projects=tuple(data.get("projects") or ()),
            updates=tuple(data.get("updates") or ()),
            messages=tuple(data.get("messages") or ()),
            tasks=tuple(data.get("tasks") or ()),
        )


def parse_timestamp(value: Any, tz: tzinfo = timezone.utc) -> datetime | None:
    """
    Parse a record's date field into an aware datetime.

    Date-only values mean midnight UTC; naive timestamps are interpreted
    in `tz`. Returns None for empty or unparseable input.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime.combine(value, time(0, 0), tzinfo=timezone.utc)
    elif isinstance(value, str):
        text = value.strip()
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
        if _DATE_ONLY.fullmatch(text):
            return parsed.replace(tzinfo=timezone.utc)
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed


def deadline_from_record(
    record: Mapping[str, Any],
    deadline_type: DeadlineType,
    as_of: datetime,
    tz: tzinfo = timezone.utc,
) -> DeadlineItem | None:
    """
    Normalize one source record into a DeadlineItem.

    Returns None when the record has no date or the date is malformed.
    """
    raw = record.get(deadline_type.date_field)
    if raw is None or raw == "":
        return None

    when = parse_timestamp(raw, tz)
    if when is None:
        logger.warning(
            f"Skipping {deadline_type.value} {record.get('id')!r}: "
            f"invalid {deadline_type.date_field} {raw!r}"
        )
        return None

    record_id = str(record.get("id", ""))
    return DeadlineItem(
        id=record_id,
        title=record.get(deadline_type.title_field) or "",
        type=deadline_type,
        date=when,
        status=DeadlineStatus.PAST if when < as_of else DeadlineStatus.UPCOMING,
        link=deadline_type.link_for(record_id),
    )


def aggregate_deadlines(
    sources: DeadlineSources,
    as_of: datetime | None = None,
    tz: tzinfo = timezone.utc,
) -> list[DeadlineItem]:
    """
    Merge projects, updates, messages and tasks into one sorted deadline list.

    Pure function - no I/O. Ties keep source order.
    """
    as_of = as_of or datetime.now(timezone.utc)
    if as_of.tzinfo is None:
        as_of = as_of.replace(tzinfo=tz)

    items = []
    for deadline_type in DeadlineType:
        for record in sources.records(deadline_type):
            item = deadline_from_record(record, deadline_type, as_of, tz)
            if item:
                items.append(item)

    logger.debug(f"Aggregated {len(items)} deadlines as of {as_of.isoformat()}")
    return sorted(items, key=lambda d: d.date)


def filter_by_status(items: list[DeadlineItem], status: DeadlineStatus) -> list[DeadlineItem]:
    """Filter deadlines to a single status."""
    return [d for d in items if d.status == status]


def split_by_status(items: list[DeadlineItem]) -> tuple[list[DeadlineItem], list[DeadlineItem]]:
    """
    Split deadlines into upcoming and past.

    Returns: (upcoming, past)
    """
    return (
        filter_by_status(items, DeadlineStatus.UPCOMING),
        filter_by_status(items, DeadlineStatus.PAST),
    )
