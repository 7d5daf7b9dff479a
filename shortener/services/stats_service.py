"""
Statistics Service

This service builds the read-only views over the registry:
- a listing of every short URL with summary fields
- a detail view of one short URL with its full click history

Both are pure projections; nothing here writes to the registry.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from shortener.core.exceptions import NotFoundError
from shortener.core.setting import settings
from shortener.registry import UrlRecord, UrlRegistry
from shortener.services.url_service import utc_now

logger = logging.getLogger(__name__)


def build_short_url(shortcode: str, base_url: Optional[str] = None) -> str:
    base = (base_url or settings.BASE_URL).rstrip("/")
    return f"{base}/{shortcode}"


class StatsService:
    """
    Service for retrieving URL statistics.
    """

    def __init__(self, registry: UrlRegistry, clock: Callable[[], datetime] = utc_now):
        self.registry = registry
        self.clock = clock

    def summarize(self, record: UrlRecord, now: datetime) -> dict:
        """
        Summary fields for one record.

        Note:
        - expired is informational; expired links still redirect
        """
        return {
            "short_code": record.shortcode,
            "short_url": build_short_url(record.shortcode),
            "long_url": record.long_url,
            "created_at": record.created_at,
            "expires_at": record.expires_at,
            "click_count": record.click_count,
            "last_clicked_at": record.last_clicked_at,
            "expired": record.is_expired(now),
        }

    def list_urls(self) -> List[dict]:
        """Summaries of every record, in insertion order."""
        now = self.clock()
        return [self.summarize(record, now) for record in self.registry.list()]

    def get_stats(self, shortcode: str) -> dict:
        """
        Summary plus click history for one shortcode.

        Raises:
            NotFoundError: If the shortcode is not registered
        """
        record = self.registry.find(shortcode)
        if record is None:
            logger.warning("Shortcode not found", extra={"data": {"shortcode": shortcode}})
            raise NotFoundError(shortcode)

        logger.info("Viewing statistics for shortcode", extra={"data": {"shortcode": shortcode}})
        stats = self.summarize(record, self.clock())
        stats["clicks"] = [
            {"timestamp": click.timestamp, "source": click.source, "location": click.location}
            for click in record.clicks
        ]
        return stats
