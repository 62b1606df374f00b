"""Tests for the workflow layer."""

from datetime import date
from unittest.mock import MagicMock

import pytest

from almanac.adapters import HttpEventRepository, JsonFileEventRepository
from almanac.config import Config
from almanac.core.events import RepeatKind
from almanac.workflows import find_occurrences, get_repository, next_occurrences


@pytest.fixture
def repo(make_event):
    repo = MagicMock()
    events = [
        make_event(date(2025, 2, 15), RepeatKind.DAILY, until=date(2025, 2, 18), event_id="daily"),
        make_event(date(2025, 2, 20), event_id="once", title="Dentist", description="", location=""),
    ]
    repo.fetch_all.return_value = events
    repo.fetch_event.side_effect = lambda event_id: next((e for e in events if e.id == event_id), None)
    return repo


class TestGetRepository:
    def test_prefers_api(self):
        repo = get_repository(Config(api_base_url="http://localhost:5173", request_timeout=4))
        assert isinstance(repo, HttpEventRepository)
        assert repo.timeout == 4

    def test_falls_back_to_file(self, tmp_path):
        repo = get_repository(Config(events_file=str(tmp_path / "events.json")))
        assert isinstance(repo, JsonFileEventRepository)
        assert repo.path == tmp_path / "events.json"


class TestFindOccurrences:
    def test_week(self, repo):
        result = find_occurrences(Config(), "week", date(2025, 2, 17), repo=repo)
        assert [(o.source_event_id, o.date.day) for o in result] == [
            ("daily", 16),
            ("daily", 17),
            ("daily", 18),
            ("once", 20),
        ]

    def test_search(self, repo):
        result = find_occurrences(Config(), "month", date(2025, 2, 1), "dentist", repo=repo)
        assert [o.source_event_id for o in result] == ["once"]

    def test_uses_configured_week_start(self, repo):
        result = find_occurrences(Config(week_start=0), "week", date(2025, 2, 17), repo=repo)
        # Monday-start week is Feb 17-23
        assert [o.date.day for o in result] == [17, 18, 20]


class TestNextOccurrences:
    def test_next(self, repo):
        result = next_occurrences(Config(), "daily", date(2025, 2, 17), limit=5, repo=repo)
        assert [o.date.day for o in result] == [17, 18]

    def test_unknown_event(self, repo):
        with pytest.raises(RuntimeError, match="No event"):
            next_occurrences(Config(), "missing", date(2025, 2, 17), repo=repo)
