"""Shared fixtures."""

from datetime import date, time

import pytest

from almanac.core.events import DayPolicy, RecurrenceRule, RepeatKind, StoredEvent


@pytest.fixture
def make_event():
    """Factory for creating stored events."""
    def _make(
        event_date: date,
        kind: RepeatKind = RepeatKind.NONE,
        interval: int = 1,
        day_policy: DayPolicy | None = None,
        until: date | None = None,
        count: int | None = None,
        unbounded: bool = False,
        event_id: str = "1",
        title: str = "팀 회의",
        description: str = "주간 팀 미팅",
        location: str = "회의실 A",
        exclude_dates: tuple[date, ...] = (),
    ) -> StoredEvent:
        return StoredEvent(
            id=event_id,
            title=title,
            date=event_date,
            start_time=time(9, 0),
            end_time=time(10, 0),
            description=description,
            location=location,
            category="업무",
            repeat=RecurrenceRule(
                kind=kind,
                interval=interval,
                day_policy=day_policy,
                termination_date=until,
                occurrence_limit=count,
                unbounded=unbounded,
            ),
            exclude_dates=exclude_dates,
        )
    return _make
