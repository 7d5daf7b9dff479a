"""
Custom Exceptions

This module defines custom exceptions for better error handling
and more specific error messages.

Every failure is local to the request that caused it: the registry is
left unchanged and the caller can correct the input and retry.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional


class URLShortenerException(Exception):
    """Base exception for URL shortener service."""
    pass


@dataclass(frozen=True)
class FieldError:
    """A single rejected field of a draft entry.

    ``index`` is the entry's position in the batch, or None when the error
    concerns the batch as a whole.
    """
    index: Optional[int]
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"index": self.index, "field": self.field, "message": self.message}


class ValidationError(URLShortenerException):
    """Raised when one or more draft entries fail validation."""

    def __init__(self, errors: Iterable[FieldError], message: str = "Please fix the errors in the form"):
        self.errors: List[FieldError] = list(errors)
        self.message = message
        super().__init__(f"{message} ({len(self.errors)} error(s))")


class DuplicateShortcodeError(URLShortenerException):
    """Raised when a batch reuses a shortcode, within itself or against the registry."""

    BATCH = "batch"
    REGISTRY = "registry"

    def __init__(self, shortcodes: Iterable[str], scope: str):
        self.shortcodes = sorted(set(shortcodes))
        self.scope = scope
        if scope == self.BATCH:
            reason = "Shortcodes must be unique"
        else:
            reason = "One or more shortcodes are already in use"
        super().__init__(f"{reason}: {', '.join(self.shortcodes)}")


class NotFoundError(URLShortenerException):
    """Raised when a shortcode is not present in the registry."""

    def __init__(self, shortcode: str):
        self.shortcode = shortcode
        super().__init__(f"Short code '{shortcode}' not found")


class GenerationExhausted(URLShortenerException):
    """Raised when no free shortcode could be generated within the retry cap."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Failed to generate a unique shortcode after {attempts} attempts")
