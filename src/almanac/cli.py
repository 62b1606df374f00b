"""Almanac CLI - recurring calendar queries."""

import json
import logging
import sys
from datetime import date

import click

from .config import load_config
from .core.events import Occurrence, RepeatKind
from .core.query import View, sort_occurrences
from .core.recurrence import day_policy_options
from .workflows import find_occurrences, next_occurrences


class DateParam(click.ParamType):
    """A YYYY-MM-DD date."""

    name = "date"

    def convert(self, value, param, ctx):
        if isinstance(value, date):
            return value
        try:
            return date.fromisoformat(value)
        except ValueError:
            self.fail(f"{value!r} is not a YYYY-MM-DD date", param, ctx)


DATE = DateParam()


@click.group()
@click.version_option(package_name="almanac")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Almanac - recurring calendar queries."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


def _serialize(o: Occurrence) -> dict:
    return {
        "id": o.occurrence_id,
        "sourceEventId": o.source_event_id,
        "isRecurring": o.is_recurring,
        "title": o.title,
        "date": o.date.isoformat(),
        "startTime": o.start_time.strftime("%H:%M") if o.start_time else None,
        "endTime": o.end_time.strftime("%H:%M") if o.end_time else None,
        "description": o.description,
        "location": o.location,
        "category": o.category,
        "repeat": o.repeat.to_api(),
        "notificationTime": o.notification_time,
    }


def _show_occurrences(occurrences: list[Occurrence], as_json: bool, empty_msg: str) -> None:
    """Shared occurrence display logic."""
    if as_json:
        click.echo(json.dumps([_serialize(o) for o in occurrences], indent=2, ensure_ascii=False))
        return

    if not occurrences:
        click.echo(empty_msg)
        return

    current_date = None
    for o in sort_occurrences(occurrences):
        if o.date != current_date:
            if current_date is not None:
                click.echo()
            click.echo(f"### {o.date.strftime('%A, %B %d %Y')}")
            current_date = o.date

        repeat = " (repeats)" if o.is_recurring else ""
        loc = f" @ {o.location}" if o.location else ""
        click.echo(f"  {o.format_time():11} {o.title}{loc}{repeat}")


@main.command()
@click.option(
    "--view",
    type=click.Choice([v.value for v in View]),
    default=View.WEEK.value,
    show_default=True,
    help="Calendar view",
)
@click.option("--date", "reference_date", type=DATE, default=None, help="Any day in the view (default: today)")
@click.option("--search", "search_term", default="", help="Match title, description or location")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def events(view: str, reference_date: date | None, search_term: str, as_json: bool):
    """Show event occurrences in a week or month."""
    config = load_config()
    reference_date = reference_date or date.today()
    try:
        occurrences = find_occurrences(config, view, reference_date, search_term)
    except (RuntimeError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _show_occurrences(occurrences, as_json, f"No events this {view}.")


@main.command("next")
@click.argument("event_id")
@click.option("--count", default=5, show_default=True, type=click.IntRange(min=1), help="How many occurrences")
@click.option("--after", type=DATE, default=None, help="First day to consider (default: today)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def next_(event_id: str, count: int, after: date | None, as_json: bool):
    """Show the next occurrences of one event."""
    config = load_config()
    after = after or date.today()
    try:
        occurrences = next_occurrences(config, event_id, after, count)
    except (RuntimeError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _show_occurrences(occurrences, as_json, "No upcoming occurrences.")


@main.command("day-options")
@click.argument("start", type=DATE)
@click.option(
    "--repeat",
    "kind",
    type=click.Choice([RepeatKind.MONTHLY.value, RepeatKind.YEARLY.value]),
    default=RepeatKind.MONTHLY.value,
    show_default=True,
)
def day_options(start: date, kind: str):
    """List the day policies available for a rule starting on START."""
    for policy in day_policy_options(start, RepeatKind(kind)):
        click.echo(policy.value)
