"""Adapters - I/O implementations of ports."""

from .json_file import JsonFileEventRepository
from .http_api import HttpEventRepository

__all__ = [
    "JsonFileEventRepository",
    "HttpEventRepository",
]
