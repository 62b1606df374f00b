"""Tests for the search + view query engine."""

from dataclasses import replace
from datetime import date, time

import pytest

from almanac.core.dates import DateWindow
from almanac.core.events import RepeatKind
from almanac.core.query import (
    UnsupportedView,
    View,
    query,
    resolve_window,
    search_events,
    sort_occurrences,
)


@pytest.fixture
def events(make_event):
    return [
        make_event(date(2024, 10, 15), event_id="1", title="팀 회의", description="주간 팀 미팅", location="회의실 A"),
        make_event(
            date(2024, 10, 16),
            event_id="2",
            title="프로젝트 계획",
            description="새 프로젝트 계획 수립",
            location="회의실 B",
        ),
    ]


class TestSearchEvents:
    def test_empty_term_keeps_all(self, events):
        assert search_events(events, "") == events

    def test_matches_title(self, events):
        assert [e.id for e in search_events(events, "팀 회의")] == ["1"]

    def test_matches_description(self, events):
        assert [e.id for e in search_events(events, "수립")] == ["2"]

    def test_matches_location(self, events):
        assert [e.id for e in search_events(events, "회의실")] == ["1", "2"]

    def test_case_insensitive(self, make_event):
        event = make_event(date(2025, 1, 1), title="Weekly Sync", description="", location="")
        assert search_events([event], "weekly SYNC") == [event]

    def test_no_match(self, events):
        assert search_events(events, "존재하지 않는 일정") == []


class TestResolveWindow:
    def test_week(self):
        assert resolve_window(View.WEEK, date(2024, 10, 15)) == DateWindow(date(2024, 10, 13), date(2024, 10, 19))

    def test_month_from_string(self):
        assert resolve_window("month", date(2024, 10, 15)) == DateWindow(date(2024, 10, 1), date(2024, 10, 31))

    @pytest.mark.parametrize("view", ["day", "year", "", None])
    def test_unsupported(self, view):
        with pytest.raises(UnsupportedView):
            resolve_window(view, date(2024, 10, 15))


class TestQuery:
    def test_search_in_week(self, events):
        result = query(events, "팀 회의", View.WEEK, date(2024, 10, 15))
        assert [o.source_event_id for o in result] == ["1"]
        assert result[0].date == date(2024, 10, 15)

    def test_empty_search_returns_both(self, events):
        result = query(events, "", View.WEEK, date(2024, 10, 15))
        assert [o.source_event_id for o in result] == ["1", "2"]

    def test_week_without_events_is_empty(self, events):
        assert query(events, "", View.WEEK, date(2024, 11, 15)) == []

    def test_month_view(self, events):
        assert len(query(events, "", "month", date(2024, 10, 1))) == 2

    def test_unsupported_view(self, events):
        with pytest.raises(UnsupportedView):
            query(events, "", "agenda", date(2024, 10, 15))

    def test_orders_by_event_then_date(self, make_event):
        weekly = make_event(date(2025, 2, 9), RepeatKind.WEEKLY, event_id="weekly")
        daily = make_event(date(2025, 2, 1), RepeatKind.DAILY, event_id="daily", count=2)
        result = query([weekly, daily], "", View.MONTH, date(2025, 2, 1))

        assert [o.source_event_id for o in result] == ["weekly"] * 3 + ["daily"] * 2
        assert [o.date.day for o in result] == [9, 16, 23, 1, 2]

    def test_monday_week_start(self, make_event):
        sunday = make_event(date(2024, 10, 13))
        assert query([sunday], "", View.WEEK, date(2024, 10, 15), first_weekday=0) == []

    def test_recurring_in_search(self, make_event):
        recurring = make_event(date(2025, 2, 15), RepeatKind.DAILY, until=date(2025, 2, 18))
        result = query([recurring], "팀", View.WEEK, date(2025, 2, 17))
        # Week of Feb 16-22
        assert [o.date for o in result] == [date(2025, 2, 16), date(2025, 2, 17), date(2025, 2, 18)]


class TestSortOccurrences:
    def test_sorts_by_date_then_time(self, make_event):
        late = make_event(date(2025, 2, 10), event_id="late")
        early = make_event(date(2025, 2, 1), RepeatKind.WEEKLY, event_id="early", count=3)
        result = sort_occurrences(query([late, early], "", View.MONTH, date(2025, 2, 1)))
        assert [o.date.day for o in result] == [1, 8, 10, 15]

    def test_all_day_first(self, make_event):
        timed = make_event(date(2025, 2, 1), event_id="timed")
        all_day = replace(make_event(date(2025, 2, 1), event_id="all-day"), start_time=None, end_time=None)
        result = sort_occurrences(query([timed, all_day], "", View.WEEK, date(2025, 2, 1)))
        assert [o.source_event_id for o in result] == ["all-day", "timed"]
        assert result[1].start_time == time(9, 0)
