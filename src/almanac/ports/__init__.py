"""Ports - interfaces/protocols for external dependencies."""

from .event_repo import EventRepository

__all__ = [
    "EventRepository",
]
