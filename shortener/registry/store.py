"""
In-Memory URL Registry

Holds every UrlRecord for the lifetime of the application instance.
The application creates one registry and hands it to the services that
need it; there is no module-level instance.

Design Decisions:
- State is a tuple that is swapped wholesale on every write, so readers
  holding the previous tuple never observe a half-applied batch
- All methods are synchronous: callers on the event loop run each
  operation to completion without yielding
"""

import logging
from typing import Iterable, Iterator, List, Optional, Set, Tuple

from shortener.core.exceptions import DuplicateShortcodeError, NotFoundError
from shortener.registry.models import UrlRecord

logger = logging.getLogger(__name__)


class UrlRegistry:
    """Ordered, in-memory collection of URL records."""

    def __init__(self, records: Iterable[UrlRecord] = ()):
        self._records: Tuple[UrlRecord, ...] = ()
        self.add_all(records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[UrlRecord]:
        return iter(self._records)

    def __contains__(self, shortcode: object) -> bool:
        return isinstance(shortcode, str) and self.find(shortcode) is not None

    def shortcodes(self) -> Set[str]:
        """Return the set of shortcodes currently in use."""
        return {record.shortcode for record in self._records}

    def list(self) -> List[UrlRecord]:
        """Return all records in insertion order."""
        return list(self._records)

    def find(self, shortcode: str) -> Optional[UrlRecord]:
        """Return the record for a shortcode, or None if absent."""
        for record in self._records:
            if record.shortcode == shortcode:
                return record
        return None

    def get(self, shortcode: str) -> UrlRecord:
        """
        Return the record for a shortcode.

        Raises:
            NotFoundError: If no record uses the shortcode
        """
        record = self.find(shortcode)
        if record is None:
            raise NotFoundError(shortcode)
        return record

    def add_all(self, records: Iterable[UrlRecord]) -> List[UrlRecord]:
        """
        Append a batch of records atomically.

        Uniqueness is re-checked here, against the registry and within the
        batch, so the registry can never hold two records with one code.

        Raises:
            DuplicateShortcodeError: If any shortcode is already taken
        """
        batch = list(records)
        if not batch:
            return []

        seen: Set[str] = set()
        repeated = set()
        for record in batch:
            if record.shortcode in seen:
                repeated.add(record.shortcode)
            seen.add(record.shortcode)
        if repeated:
            raise DuplicateShortcodeError(repeated, DuplicateShortcodeError.BATCH)

        taken = seen & self.shortcodes()
        if taken:
            raise DuplicateShortcodeError(taken, DuplicateShortcodeError.REGISTRY)

        self._records = self._records + tuple(batch)
        logger.debug(f"Registry grew to {len(self._records)} records")
        return batch

    def replace(self, record: UrlRecord) -> UrlRecord:
        """
        Swap in a new value for the record with the same shortcode.

        Raises:
            NotFoundError: If no record uses the shortcode
        """
        updated = []
        found = False
        for existing in self._records:
            if existing.shortcode == record.shortcode:
                updated.append(record)
                found = True
            else:
                updated.append(existing)
        if not found:
            raise NotFoundError(record.shortcode)

        self._records = tuple(updated)
        return record
