"""
Registry Models

Immutable value types held by the in-memory registry.

Design Decisions:
- Frozen dataclasses: a record is never edited in place, a click produces
  a new record that replaces the old one in the registry
- clicks is a tuple so the history can only grow by replacement
- expires_at is informational only; nothing in the service enforces it
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Optional, Tuple

from shortener.core.setting import DEFAULT_CLICK_LOCATION

DIRECT_SOURCE = "Direct"


@dataclass(frozen=True)
class ClickEvent:
    """One recorded visit of a short URL."""
    timestamp: datetime
    source: str = DIRECT_SOURCE
    location: str = DEFAULT_CLICK_LOCATION


@dataclass(frozen=True)
class UrlRecord:
    """
    A registered short URL.

    Attributes:
        long_url: The original absolute URL
        shortcode: Unique token the short URL is built from
        created_at: When the record was registered (UTC)
        expires_at: created_at plus the requested validity (UTC)
        clicks: Click history in the order clicks were recorded
    """
    long_url: str
    shortcode: str
    created_at: datetime
    expires_at: datetime
    clicks: Tuple[ClickEvent, ...] = field(default_factory=tuple)

    @property
    def last_clicked_at(self) -> Optional[datetime]:
        return self.clicks[-1].timestamp if self.clicks else None

    @property
    def click_count(self) -> int:
        return len(self.clicks)

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def with_click(self, click: ClickEvent) -> "UrlRecord":
        return replace(self, clicks=self.clicks + (click,))


@dataclass(frozen=True)
class DraftEntry:
    """A URL submitted for shortening, before validation.

    Fields hold whatever the caller sent; validation decides what is usable.
    """
    long_url: Any
    shortcode: Any = None
    validity_minutes: Any = None
