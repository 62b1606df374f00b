"""JSON file event store adapter."""

import json
import logging
from pathlib import Path

from almanac.core.events import StoredEvent, events_from_payload

logger = logging.getLogger(__name__)


class JsonFileEventRepository:
    """
    Reads stored events from a JSON file.

    Implements EventRepository protocol. The file holds the same payload the
    event API serves: `{"events": [...]}` or a bare list of events.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def fetch_all(self) -> list[StoredEvent]:
        """Fetch every stored event, in file order."""
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.error(f"Events file not found: {self.path}")
            raise RuntimeError(f"Events file not found: {self.path}")
        except OSError as e:
            logger.error(f"Could not read events file {self.path}: {e}")
            raise RuntimeError(f"Could not read events file {self.path}: {e}")
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse events file {self.path}: {e}")
            raise RuntimeError(f"Events file {self.path} is not valid JSON: {e}")

        return events_from_payload(data)

    def fetch_event(self, event_id: str) -> StoredEvent | None:
        """Fetch one event by id."""
        return next((e for e in self.fetch_all() if e.id == event_id), None)
