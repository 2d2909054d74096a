"""Huddle CLI - deadline board and expense splitter."""

import json
import logging
import sys

import click

from .adapters.file_snapshot import SnapshotError
from .config import load_config
from .core.deadlines import DeadlineStatus, filter_by_status
from .core.report import format_deadline_sections, format_split_lines
from .core.splits import SplitError
from .workflows import build_deadlines, build_split, parse_override

STATUS_TITLES = {
    "upcoming": "Upcoming",
    "past": "Past",
    "all": "All",
}


@click.group()
@click.version_option(package_name="huddle")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Huddle - deadlines and expense splits."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command()
@click.option(
    "--status",
    type=click.Choice(["upcoming", "past", "all"]),
    default="all",
    show_default=True,
    help="Which deadlines to show",
)
@click.option("--file", "path", default=None, type=click.Path(dir_okay=False),
              help="Snapshot JSON file (overrides config)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def deadlines(status: str, path: str | None, as_json: bool):
    """Show project, update, message and task deadlines."""
    config = load_config()
    try:
        items = build_deadlines(config, path)
    except SnapshotError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        if status != "all":
            items = filter_by_status(items, DeadlineStatus(status))
        click.echo(json.dumps([d.to_dict() for d in items], indent=2))
        return

    sections = format_deadline_sections(items)
    click.echo(f"### {STATUS_TITLES[status]} Deadlines")
    click.echo(sections[status])


@main.command()
@click.argument("amount")
@click.argument("names", nargs=-1)
@click.option("--share", "shares", multiple=True, metavar="NAME=VALUE",
              help="Manually set a participant's share (repeatable)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def split(amount: str, names: tuple[str, ...], shares: tuple[str, ...], as_json: bool):
    """Split AMOUNT evenly across NAMES, with optional manual shares."""
    config = load_config()
    try:
        overrides = dict(parse_override(s) for s in shares)
        expense = build_split(amount, list(names), overrides)
    except (SplitError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(expense.to_dict(), indent=2))
    else:
        click.echo(format_split_lines(expense, config.currency))


if __name__ == "__main__":
    main()
