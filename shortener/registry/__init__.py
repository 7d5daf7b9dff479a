"""
Registry module.

This module provides:
- UrlRecord / ClickEvent / DraftEntry: immutable value types
- UrlRegistry: the in-memory store owned by the application instance
"""

from shortener.registry.models import ClickEvent, DraftEntry, UrlRecord, DIRECT_SOURCE
from shortener.registry.store import UrlRegistry

__all__ = [
    "ClickEvent",
    "DraftEntry",
    "UrlRecord",
    "UrlRegistry",
    "DIRECT_SOURCE",
]
