"""Event repository interface."""

from typing import Protocol

from almanac.core.events import StoredEvent


class EventRepository(Protocol):
    """Interface for fetching stored events from any backend."""

    def fetch_all(self) -> list[StoredEvent]:
        """Fetch every stored event, in storage order."""
        ...

    def fetch_event(self, event_id: str) -> StoredEvent | None:
        """Fetch one event by id. Returns None if not found."""
        ...
