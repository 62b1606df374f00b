"""Workflows - wire config, event sources and the core together."""

import logging
from datetime import date

from .adapters import HttpEventRepository, JsonFileEventRepository
from .config import Config
from .core.events import Occurrence
from .core.expansion import upcoming
from .core.query import View, query
from .ports import EventRepository

logger = logging.getLogger(__name__)


def get_repository(config: Config) -> EventRepository:
    """Event source for a config: the event API if configured, else the events file."""
    if config.api_base_url:
        logger.debug(f"Reading events from API at {config.api_base_url}")
        return HttpEventRepository(config.api_base_url, timeout=config.request_timeout)
    logger.debug(f"Reading events from {config.events_file}")
    return JsonFileEventRepository(config.events_file)


def find_occurrences(
    config: Config,
    view: View | str,
    reference_date: date,
    search_term: str = "",
    repo: EventRepository | None = None,
) -> list[Occurrence]:
    """Fetch stored events and expand the ones matching a search into a view."""
    repo = repo or get_repository(config)
    events = repo.fetch_all()
    return query(
        events,
        search_term,
        view,
        reference_date,
        first_weekday=config.week_start,
        unbounded_until=config.unbounded_until,
    )


def next_occurrences(
    config: Config,
    event_id: str,
    after: date,
    limit: int = 5,
    repo: EventRepository | None = None,
) -> list[Occurrence]:
    """
    The next occurrences of one stored event.

    Raises:
        RuntimeError: If no event has that id.
    """
    repo = repo or get_repository(config)
    event = repo.fetch_event(event_id)
    if event is None:
        raise RuntimeError(f"No event with id {event_id!r}")
    return upcoming(event, after, limit, unbounded_until=config.unbounded_until)
