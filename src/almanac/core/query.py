"""Search and view filtering over stored events - no I/O."""

from datetime import date, time
from enum import Enum

from .dates import SUNDAY, DateWindow, month_window, week_window
from .events import Occurrence, StoredEvent
from .expansion import expand
from .recurrence import UNBOUNDED_UNTIL


class UnsupportedView(ValueError):
    """Raised for a calendar view other than week or month."""

    pass


class View(Enum):
    """Calendar view selecting the query window."""

    WEEK = "week"
    MONTH = "month"


def _contains_term(target: str, term: str) -> bool:
    return term.lower() in target.lower()


def search_events(events: list[StoredEvent], term: str) -> list[StoredEvent]:
    """Events whose title, description or location contains the term (case-insensitive)."""
    if not term:
        return list(events)
    return [
        e
        for e in events
        if _contains_term(e.title, term)
        or _contains_term(e.description, term)
        or _contains_term(e.location, term)
    ]


def resolve_window(
    view: View | str,
    reference_date: date,
    first_weekday: int = SUNDAY,
) -> DateWindow:
    """
    Date window shown by a view around a reference date.

    Raises:
        UnsupportedView: If the view is not week or month.
    """
    try:
        view = View(view)
    except ValueError:
        raise UnsupportedView(f"Unsupported view: {view!r}") from None

    if view is View.WEEK:
        return week_window(reference_date, first_weekday)
    return month_window(reference_date)


def query(
    events: list[StoredEvent],
    search_term: str,
    view: View | str,
    reference_date: date,
    first_weekday: int = SUNDAY,
    unbounded_until: date = UNBOUNDED_UNTIL,
) -> list[Occurrence]:
    """
    Occurrences of matching events inside the view window.

    Pure function - no I/O. Results are ordered by source event order, then
    by date within each event. Callers wanting a global date order must sort.
    """
    window = resolve_window(view, reference_date, first_weekday)
    occurrences = []
    for event in search_events(events, search_term):
        occurrences.extend(expand(event, window.start, window.end, unbounded_until))
    return occurrences


def sort_occurrences(occurrences: list[Occurrence]) -> list[Occurrence]:
    """Sort occurrences by date, then start time (all-day first)."""
    return sorted(occurrences, key=lambda o: (o.date, o.start_time or time.min))
