"""
URL Shortening Service

This service handles the core business logic for URL shortening:
- Validating a batch of draft entries
- Generating unique short codes for entries that did not supply one
- Committing the whole batch to the registry, or nothing at all

Design Decisions:
- Base36 codes: lowercase letters and digits, 6 characters by default
- Generate-and-check: every generated code is checked against the registry
  and the rest of the batch, and redrawn on collision up to a fixed cap
- All-or-nothing: every check runs before the registry is touched
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable, List, Optional, Set

from shortener.core.exceptions import (
    DuplicateShortcodeError,
    FieldError,
    GenerationExhausted,
    ValidationError,
)
from shortener.core.setting import settings
from shortener.core.validators import (
    is_reserved_shortcode,
    is_valid_shortcode,
    is_valid_url,
    is_valid_validity,
    normalize_shortcode,
)
from shortener.registry import DraftEntry, UrlRecord, UrlRegistry

logger = logging.getLogger(__name__)


BASE36_CHARS = "0123456789abcdefghijklmnopqrstuvwxyz"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def expiry_in_range(now: datetime, minutes: int) -> bool:
    """True when now + minutes is representable as a datetime."""
    try:
        now + timedelta(minutes=minutes)
    except OverflowError:
        return False
    return True


def generate_base36(length: int = 6) -> str:
    """
    Draw a random base36 token.

    Example:
        generate_base36() -> "k3x9q0"
    """
    return "".join(secrets.choice(BASE36_CHARS) for _ in range(length))


class URLShorteningService:
    """
    Core business logic for URL shortening.

    Handles draft validation, code generation and the atomic insert into
    the registry. Separated from the API layer for testability.
    """

    def __init__(
        self,
        registry: UrlRegistry,
        clock: Callable[[], datetime] = utc_now,
        code_generator: Optional[Callable[[], str]] = None,
        max_attempts: int = settings.SHORTCODE_MAX_ATTEMPTS,
        max_batch_size: int = settings.MAX_BATCH_SIZE,
        default_validity: int = settings.DEFAULT_VALIDITY_MINUTES,
        max_validity: int = settings.MAX_VALIDITY_MINUTES,
    ):
        """
        Initialize the URL shortening service.

        Args:
            registry: The registry new records are appended to
            clock: Source of the creation timestamp
            code_generator: Produces candidate shortcodes (default: base36)
            max_attempts: Draws per entry before giving up
            max_batch_size: Largest batch accepted in one call
            default_validity: Minutes applied when an entry has no validity
            max_validity: Longest validity accepted for one entry
        """
        self.registry = registry
        self.clock = clock
        self.code_generator = code_generator or (lambda: generate_base36(settings.SHORTCODE_LENGTH))
        self.max_attempts = max_attempts
        self.max_batch_size = max_batch_size
        self.default_validity = default_validity
        self.max_validity = max_validity

    def validate_batch(self, drafts: List[DraftEntry], now: Optional[datetime] = None) -> List[FieldError]:
        """
        Collect every field error in a batch.

        Args:
            drafts: Draft entries in submission order
            now: Creation time the expiry dates will be computed from

        Returns:
            List of FieldError, empty when the batch is valid
        """
        if not drafts:
            return [FieldError(None, "urls", "At least one URL is required")]
        if len(drafts) > self.max_batch_size:
            return [FieldError(None, "urls", f"Maximum of {self.max_batch_size} URLs allowed")]

        errors = []
        for index, draft in enumerate(drafts):
            long_url = draft.long_url.strip() if isinstance(draft.long_url, str) else draft.long_url
            if not long_url:
                errors.append(FieldError(index, "long_url", "URL is required"))
            elif not isinstance(long_url, str) or not is_valid_url(long_url):
                errors.append(FieldError(index, "long_url", "Invalid URL format"))

            shortcode = normalize_shortcode(draft.shortcode)
            if shortcode is not None and not is_valid_shortcode(shortcode):
                errors.append(FieldError(index, "shortcode", "Shortcode must be 4-20 alphanumeric chars"))
            elif shortcode is not None and is_reserved_shortcode(shortcode):
                errors.append(FieldError(index, "shortcode", f"Shortcode '{shortcode}' is reserved"))

            validity = self.default_validity if draft.validity_minutes is None else draft.validity_minutes
            if not is_valid_validity(validity):
                errors.append(FieldError(index, "validity_minutes", "Validity must be a positive integer"))
            elif validity > self.max_validity or not expiry_in_range(now or self.clock(), validity):
                errors.append(FieldError(
                    index, "validity_minutes", f"Validity must be at most {self.max_validity} minutes"
                ))
        return errors

    def generate_shortcode(self, taken: Set[str]) -> str:
        """
        Generate a shortcode that is not in ``taken``.

        Raises:
            GenerationExhausted: If every draw collided
        """
        for attempt in range(1, self.max_attempts + 1):
            candidate = self.code_generator()
            if candidate not in taken and is_valid_shortcode(candidate) and not is_reserved_shortcode(candidate):
                return candidate
            logger.debug(f"Shortcode candidate '{candidate}' rejected on attempt {attempt}")

        logger.error(
            "Shortcode generation exhausted",
            extra={"data": {"attempts": self.max_attempts, "registry_size": len(self.registry)}},
        )
        raise GenerationExhausted(self.max_attempts)

    def register_batch(self, drafts: Iterable[DraftEntry]) -> List[UrlRecord]:
        """
        Validate, assign shortcodes to, and register a batch of URLs.

        Args:
            drafts: Draft entries in submission order

        Returns:
            The created UrlRecords, in submission order

        Raises:
            ValidationError: If any entry has a bad field
            DuplicateShortcodeError: If supplied shortcodes repeat or are taken
            GenerationExhausted: If a free shortcode could not be generated
        """
        drafts = list(drafts)

        now = self.clock()
        errors = self.validate_batch(drafts, now)
        if errors:
            logger.warning(
                "Rejected batch with invalid entries",
                extra={"data": {"errors": [error.to_dict() for error in errors]}},
            )
            raise ValidationError(errors)

        supplied = [normalize_shortcode(draft.shortcode) for draft in drafts]
        custom = [code for code in supplied if code is not None]

        repeated = {code for code in custom if custom.count(code) > 1}
        if repeated:
            logger.warning("Rejected batch with repeated shortcodes", extra={"data": {"shortcodes": sorted(repeated)}})
            raise DuplicateShortcodeError(repeated, DuplicateShortcodeError.BATCH)

        in_use = self.registry.shortcodes()
        taken = set(custom) & in_use
        if taken:
            logger.warning("Rejected batch with shortcodes already in use", extra={"data": {"shortcodes": sorted(taken)}})
            raise DuplicateShortcodeError(taken, DuplicateShortcodeError.REGISTRY)

        claimed = in_use | set(custom)
        shortcodes = []
        for code in supplied:
            if code is None:
                code = self.generate_shortcode(claimed)
                claimed.add(code)
            shortcodes.append(code)

        records = []
        for draft, shortcode in zip(drafts, shortcodes):
            validity = self.default_validity if draft.validity_minutes is None else draft.validity_minutes
            records.append(UrlRecord(
                long_url=draft.long_url.strip(),
                shortcode=shortcode,
                created_at=now,
                expires_at=now + timedelta(minutes=validity),
            ))

        self.registry.add_all(records)

        logger.info(
            "URLs shortened",
            extra={"data": {"count": len(records), "shortcodes": shortcodes}},
        )
        return records
