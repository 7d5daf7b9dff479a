"""
Redirect Service

This service handles click recording and the redirect that follows it.
Separated from the URL service so the write path for clicks stays small.

Design Decisions:
- A click replaces the record with a copy holding one more ClickEvent
- A miss raises NotFoundError and leaves the registry untouched
- The service returns a NavigationDirective; turning it into an HTTP
  redirect is the API layer's job
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from shortener.core.exceptions import NotFoundError
from shortener.core.setting import settings
from shortener.registry import DIRECT_SOURCE, ClickEvent, UrlRegistry
from shortener.services.url_service import utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NavigationDirective:
    """Where the caller should go after a click was recorded."""
    shortcode: str
    target_url: str
    click: ClickEvent


class RedirectService:
    """
    Service for recording clicks and resolving redirects.
    """

    def __init__(
        self,
        registry: UrlRegistry,
        clock: Callable[[], datetime] = utc_now,
        location: str = settings.CLICK_LOCATION,
    ):
        """
        Args:
            registry: The registry holding the records
            clock: Source of click timestamps
            location: Placeholder stored as every click's location
        """
        self.registry = registry
        self.clock = clock
        self.location = location

    def record_click(self, shortcode: str, referrer: Optional[str] = None) -> NavigationDirective:
        """
        Append a click to a record and return where to send the visitor.

        Expired records are still followed; expiry is display-only.

        Raises:
            NotFoundError: If the shortcode is not registered
        """
        record = self.registry.find(shortcode)
        if record is None:
            logger.warning("Shortcode not found", extra={"data": {"shortcode": shortcode}})
            raise NotFoundError(shortcode)

        source = (referrer or "").strip() or DIRECT_SOURCE
        click = ClickEvent(timestamp=self.clock(), source=source, location=self.location)
        self.registry.replace(record.with_click(click))

        logger.info(
            "Click recorded",
            extra={"data": {"shortcode": shortcode, "source": source, "clicks": record.click_count + 1}},
        )
        return NavigationDirective(shortcode=shortcode, target_url=record.long_url, click=click)
