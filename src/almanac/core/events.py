"""Stored events, recurrence rules and derived occurrences."""

import logging
from dataclasses import dataclass, field, fields
from datetime import date, time
from enum import Enum

logger = logging.getLogger(__name__)


class InvalidRecurrenceRule(ValueError):
    """Raised when a recurrence rule could never terminate or makes no sense."""

    pass


class RepeatKind(Enum):
    """How often an event repeats."""

    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class DayPolicy(Enum):
    """Which day a monthly/yearly step lands on."""

    SPECIFIC_DAY = "specificDay"  # Keep day-of-month, clamp to month end
    LAST_DAY_OF_MONTH = "lastDayOfMonth"  # Always snap to month end


@dataclass(frozen=True)
class RecurrenceRule:
    """Recurrence policy attached to a stored event."""

    kind: RepeatKind = RepeatKind.NONE
    interval: int = 1
    day_policy: DayPolicy | None = None
    termination_date: date | None = None
    occurrence_limit: int | None = None
    unbounded: bool = False

    def __post_init__(self):
        if self.kind is RepeatKind.NONE:
            return
        if self.interval < 1:
            logger.debug(f"Rejecting {self.kind.value} rule with interval {self.interval}")
            raise InvalidRecurrenceRule(
                f"interval must be at least 1 for {self.kind.value} rules, got {self.interval}"
            )
        if self.occurrence_limit is not None and self.occurrence_limit < 1:
            raise InvalidRecurrenceRule(
                f"occurrence limit must be at least 1, got {self.occurrence_limit}"
            )

    @property
    def is_recurring(self) -> bool:
        return self.kind is not RepeatKind.NONE

    @property
    def snaps_to_month_end(self) -> bool:
        return self.day_policy is DayPolicy.LAST_DAY_OF_MONTH

    @classmethod
    def from_api(cls, data: dict | None) -> "RecurrenceRule":
        """Create a rule from the event API's `repeat` object."""
        if not data:
            return cls()
        try:
            kind = RepeatKind(data.get("type", "none"))
        except ValueError:
            raise InvalidRecurrenceRule(f"Unknown repeat type: {data.get('type')!r}") from None
        option = data.get("intervalOption")
        try:
            day_policy = DayPolicy(option) if option else None
        except ValueError:
            raise InvalidRecurrenceRule(f"Unknown interval option: {option!r}") from None
        end_date = data.get("endDate")
        return cls(
            kind=kind,
            interval=int(data.get("interval", 1)),
            day_policy=day_policy,
            termination_date=date.fromisoformat(end_date) if end_date else None,
            occurrence_limit=int(data["count"]) if data.get("count") else None,
            unbounded=bool(data.get("infinite", False)),
        )

    def to_api(self) -> dict:
        """Serialize to the event API's `repeat` object."""
        data: dict = {"type": self.kind.value, "interval": self.interval}
        if self.day_policy:
            data["intervalOption"] = self.day_policy.value
        if self.termination_date:
            data["endDate"] = self.termination_date.isoformat()
        if self.occurrence_limit:
            data["count"] = self.occurrence_limit
        if self.unbounded:
            data["infinite"] = True
        return data


def _parse_time(value: str | None) -> time | None:
    return time.fromisoformat(value) if value else None


@dataclass(frozen=True)
class StoredEvent:
    """An event as persisted by the event store. Read-only to the core."""

    id: str
    title: str
    date: date
    start_time: time | None = None
    end_time: time | None = None
    description: str = ""
    location: str = ""
    category: str = ""
    repeat: RecurrenceRule = field(default_factory=RecurrenceRule)
    notification_time: int = 10  # minutes before start
    exclude_dates: tuple[date, ...] = ()

    @classmethod
    def from_api(cls, data: dict) -> "StoredEvent":
        """Create a StoredEvent from an event API payload."""
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            date=date.fromisoformat(data["date"]),
            start_time=_parse_time(data.get("startTime")),
            end_time=_parse_time(data.get("endTime")),
            description=data.get("description") or "",
            location=data.get("location") or "",
            category=data.get("category") or "",
            repeat=RecurrenceRule.from_api(data.get("repeat")),
            notification_time=int(data.get("notificationTime", 10)),
            exclude_dates=tuple(date.fromisoformat(d) for d in data.get("excludeDates") or []),
        )


@dataclass(frozen=True)
class Occurrence:
    """
    One concrete calendar instance of a stored event.

    Created fresh on every query and never persisted. `occurrence_id` is a
    display key only.
    """

    occurrence_id: str
    source_event_id: str
    is_recurring: bool
    title: str
    date: date
    start_time: time | None
    end_time: time | None
    description: str
    location: str
    category: str
    repeat: RecurrenceRule
    notification_time: int
    exclude_dates: tuple[date, ...]

    @classmethod
    def from_event(cls, event: StoredEvent, on: date, occurrence_id: str) -> "Occurrence":
        """Copy a stored event's fields onto a concrete date."""
        copied = {f.name: getattr(event, f.name) for f in fields(event) if f.name != "id"}
        copied["date"] = on
        return cls(
            occurrence_id=occurrence_id,
            source_event_id=event.id,
            is_recurring=event.repeat.is_recurring,
            **copied,
        )

    def format_time(self) -> str:
        """Format the occurrence time range for display."""
        if not self.start_time:
            return "All day"
        if not self.end_time:
            return self.start_time.strftime("%H:%M")
        return f"{self.start_time.strftime('%H:%M')}-{self.end_time.strftime('%H:%M')}"


def events_from_payload(data: dict | list) -> list[StoredEvent]:
    """
    Parse an event API payload into StoredEvents.

    Accepts `{"events": [...]}` or a bare list. Malformed events, including
    ones with an invalid recurrence rule, are logged and skipped. A null
    `events` list is treated as empty.

    Raises:
        ValueError: If the payload is not an event list or an object holding one.
    """
    items = (data.get("events") or []) if isinstance(data, dict) else data
    if not isinstance(items, list):
        raise ValueError(f"Unexpected event payload: expected a list of events, got {type(items).__name__}")
    events = []
    for item in items:
        try:
            events.append(StoredEvent.from_api(item))
        except (ValueError, KeyError, TypeError) as e:
            event_id = item.get("id", "?") if isinstance(item, dict) else "?"
            logger.warning(f"Skipping malformed event {event_id}: {e}")
            continue
    return events
