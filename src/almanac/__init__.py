"""Almanac - recurring event expansion for calendar views."""

__version__ = "0.1.0"
