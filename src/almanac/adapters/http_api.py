"""Event API adapter - HTTP client for the calendar's REST endpoint."""

import logging

import requests

from almanac.core.events import StoredEvent, events_from_payload

logger = logging.getLogger(__name__)

EVENTS_ENDPOINT = "/api/events"


class HttpEventRepository:
    """
    Event API adapter.

    Implements EventRepository protocol. Reads events from
    `GET {base_url}/api/events`. No business logic - just I/O.
    """

    def __init__(self, base_url: str, timeout: int = 10, session: requests.Session | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def _get(self, endpoint: str) -> dict | list:
        url = f"{self.base_url}{endpoint}"
        try:
            resp = self._session.get(url, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.Timeout:
            logger.warning(f"Event API timed out after {self.timeout}s: {url}")
            raise RuntimeError(f"Event API timed out after {self.timeout}s")
        except requests.HTTPError as e:
            logger.error(f"Event API request failed: {e}")
            raise RuntimeError(f"Event API request failed: {e}")
        except ValueError as e:
            logger.error(f"Event API returned invalid JSON: {e}")
            raise RuntimeError(f"Event API returned invalid JSON: {e}")
        except requests.RequestException as e:
            logger.error(f"Could not reach event API at {url}: {e}")
            raise RuntimeError(f"Could not reach event API at {url}: {e}")

    def fetch_all(self) -> list[StoredEvent]:
        """Fetch every stored event, in API order."""
        return events_from_payload(self._get(EVENTS_ENDPOINT))

    def fetch_event(self, event_id: str) -> StoredEvent | None:
        """Fetch one event by id."""
        return next((e for e in self.fetch_all() if e.id == event_id), None)
