"""Pure report formatting - no I/O dependencies."""

from datetime import datetime, timezone

from .deadlines import DeadlineItem, DeadlineStatus, split_by_status
from .splits import ExpenseSplit, allocated_total, unallocated


def format_relative_days(days: int, past: bool = False) -> str:
    """Wording for a day count: "N days left", "due today" or "N days ago"."""
    if past:
        return f"{abs(days)} day{'' if abs(days) == 1 else 's'} ago"
    if days == 0:
        return "due today"
    return f"{days} day{'' if days == 1 else 's'} left"


def format_deadline_line(item: DeadlineItem, as_of: datetime | None = None) -> str:
    """
    Format a single deadline for display.

    Pure function - no I/O.
    """
    as_of = as_of or datetime.now(timezone.utc)
    when = format_relative_days(item.days_until(as_of), past=item.status == DeadlineStatus.PAST)
    return f"- {item.date.date().isoformat()} {item.title} ({item.label}, {when}) {item.link}"


def format_deadline_sections(items: list[DeadlineItem], as_of: datetime | None = None) -> dict[str, str]:
    """
    Format deadlines into the upcoming/past/all board sections.

    Pure function - no I/O.
    Returns dict with keys: upcoming, past, all
    """
    as_of = as_of or datetime.now(timezone.utc)
    upcoming, past = split_by_status(items)

    def lines(group: list[DeadlineItem], empty: str) -> str:
        return "\n".join(format_deadline_line(d, as_of) for d in group) or empty

    return {
        "upcoming": lines(upcoming, "No upcoming deadlines"),
        "past": lines(past, "No past deadlines"),
        "all": lines(items, "No deadlines"),
    }


def format_money(value: float, currency: str = "$") -> str:
    """Format an amount rounded to cents."""
    sign = "-" if value < 0 else ""
    return f"{sign}{currency}{abs(value):,.2f}"


def format_split_lines(split: ExpenseSplit, currency: str = "$") -> str:
    """Format a split as one line per participant plus totals."""
    mode = "manual" if split.manual else "even"
    lines = [f"Total: {format_money(split.amount, currency)} ({mode} split)"]
    for p in split.participants:
        marker = " (guest)" if p.is_custom else ""
        lines.append(f"- {p.name}{marker}: {format_money(split.share_for(p.key), currency)}")

    if not split.participants:
        lines.append("No participants")

    remaining = unallocated(split)
    if round(remaining, 2) != 0:
        lines.append(
            f"Allocated: {format_money(allocated_total(split), currency)}, "
            f"unallocated: {format_money(remaining, currency)}"
        )
    return "\n".join(lines)
