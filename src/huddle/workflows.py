"""Shared workflow layer between the CLI and other front ends.

Each build_* function wires configuration and adapters to the pure core and
returns core values; formatting is left to the caller.
"""

import logging
from datetime import datetime
from pathlib import Path

from .adapters.file_snapshot import FileSnapshotSource
from .adapters.http_snapshot import HttpSnapshotSource
from .config import Config
from .core.deadlines import DeadlineItem, aggregate_deadlines
from .core.splits import (
    ExpenseSplit,
    SplitParticipant,
    create_split,
    set_share,
)
from .ports import DeadlineSource

logger = logging.getLogger(__name__)


def get_source(config: Config, path: Path | str | None = None) -> DeadlineSource:
    """Resolve the snapshot source: explicit path, then URL, then configured file."""
    if path:
        return FileSnapshotSource(path)
    if config.snapshot_url:
        return HttpSnapshotSource(config.snapshot_url, token=config.snapshot_token)
    return FileSnapshotSource(config.snapshot_path)


def build_deadlines(
    config: Config,
    path: Path | str | None = None,
    as_of: datetime | None = None,
) -> list[DeadlineItem]:
    """Load the snapshot and aggregate it into the deadline board."""
    source = get_source(config, path)
    sources = source.fetch_sources()
    return aggregate_deadlines(sources, as_of=as_of, tz=config.tz)


def parse_override(raw: str) -> tuple[str, str]:
    """Split a NAME=VALUE override into its parts."""
    name, sep, value = raw.partition("=")
    name = name.strip()
    if not sep or not name:
        raise ValueError(f"Expected NAME=VALUE, got {raw!r}")
    return name, value.strip()


def build_split(
    amount: str | float,
    names: list[str],
    overrides: dict[str, str] | None = None,
) -> ExpenseSplit:
    """Build an even split for free-text names, then apply manual shares."""
    participants = [SplitParticipant.custom(name) for name in names]
    split = create_split(amount, participants)

    by_name = {p.name: p.key for p in participants}
    for name, value in (overrides or {}).items():
        key = by_name.get(name)
        if key is None:
            # Let set_share report the unknown participant
            key = SplitParticipant.custom(name).key
        split = set_share(split, key, value)

    logger.debug(f"Built split of {split.amount} across {len(participants)} participants")
    return split
