"""Expand one stored event into concrete occurrences - no I/O."""

import logging
from collections.abc import Iterator
from datetime import date
from itertools import islice

from .dates import in_range
from .events import Occurrence, StoredEvent
from .recurrence import UNBOUNDED_UNTIL, step_occurrence, termination_bound

logger = logging.getLogger(__name__)


def occurrence_id(source_id: str, on: date) -> str:
    """Display key for one occurrence of a recurring event."""
    return f"{source_id}@{on.isoformat()}"


def _to_occurrence(event: StoredEvent, on: date) -> Occurrence:
    if not event.repeat.is_recurring:
        return Occurrence.from_event(event, on, event.id)
    return Occurrence.from_event(event, on, occurrence_id(event.id, on))


def iter_occurrence_dates(event: StoredEvent, until: date, unbounded_until: date = UNBOUNDED_UNTIL) -> Iterator[date]:
    """
    Yield an event's occurrence dates in order, up to and including `until`.

    Stops at the rule's termination bound or occurrence limit, whichever
    comes first. Excluded dates are skipped but still count toward the limit.
    """
    rule = event.repeat

    if not rule.is_recurring:
        if event.date <= until:
            yield event.date
        return

    end = min(termination_bound(event.date, rule, until, unbounded_until), until)
    excluded = set(event.exclude_dates)
    current = event.date
    count = 0

    while current <= end:
        if current not in excluded:
            yield current

        count += 1
        if rule.occurrence_limit and count >= rule.occurrence_limit:
            return

        current = step_occurrence(current, rule)
        if current is None:
            return


def expand(
    event: StoredEvent,
    window_start: date,
    window_end: date,
    unbounded_until: date = UNBOUNDED_UNTIL,
) -> list[Occurrence]:
    """
    Occurrences of an event that fall inside [window_start, window_end].

    Pure function - no I/O. Results are in strictly increasing date order.

    Args:
        event: The stored event to expand
        window_start: First day of the view window (inclusive)
        window_end: Last day of the view window (inclusive)
        unbounded_until: Cap applied to rules that never end

    Returns:
        List of Occurrences, empty when nothing falls in the window
    """
    occurrences = [
        _to_occurrence(event, d)
        for d in iter_occurrence_dates(event, window_end, unbounded_until)
        if in_range(d, window_start, window_end)
    ]
    logger.debug(
        f"Expanded event {event.id} ({event.repeat.kind.value}) into {len(occurrences)} "
        f"occurrences for {window_start}..{window_end}"
    )
    return occurrences


def upcoming(
    event: StoredEvent,
    after: date,
    limit: int = 5,
    unbounded_until: date = UNBOUNDED_UNTIL,
) -> list[Occurrence]:
    """The next `limit` occurrences of an event on or after a date."""
    dates = (d for d in iter_occurrence_dates(event, unbounded_until, unbounded_until) if d >= after)
    return [_to_occurrence(event, d) for d in islice(dates, limit)]
