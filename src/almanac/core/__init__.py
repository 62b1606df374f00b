"""Functional core - pure business logic with no I/O."""

from .dates import DateWindow, in_range, month_window, week_window
from .events import (
    DayPolicy,
    InvalidRecurrenceRule,
    Occurrence,
    RecurrenceRule,
    RepeatKind,
    StoredEvent,
    events_from_payload,
)
from .recurrence import UNBOUNDED_UNTIL, day_policy_options, next_occurrence, termination_bound
from .expansion import expand, iter_occurrence_dates, occurrence_id, upcoming
from .query import UnsupportedView, View, query, resolve_window, search_events, sort_occurrences

__all__ = [
    # Dates
    "DateWindow",
    "in_range",
    "month_window",
    "week_window",
    # Events
    "DayPolicy",
    "InvalidRecurrenceRule",
    "Occurrence",
    "RecurrenceRule",
    "RepeatKind",
    "StoredEvent",
    "events_from_payload",
    # Recurrence
    "UNBOUNDED_UNTIL",
    "day_policy_options",
    "next_occurrence",
    "termination_bound",
    # Expansion
    "expand",
    "iter_occurrence_dates",
    "occurrence_id",
    "upcoming",
    # Query
    "UnsupportedView",
    "View",
    "query",
    "resolve_window",
    "search_events",
    "sort_occurrences",
]
