"""Exception types for the URL shortener."""

from enum import Enum
from typing import Optional


INVALID_URL_MESSAGE = "invalid url"
NOT_FOUND_MESSAGE = "No short URL found for given input"
SERVER_ERROR_MESSAGE = "server error"


class ShortURLError(Exception):
    """Base class for URL shortener errors."""


class InvalidUrlError(ShortURLError):
    """Raised for malformed URLs, disallowed schemes, unresolvable hosts
    and identifiers that are not finite numbers.

    Every cause carries the same message; the reason is kept separately
    for logging only.
    """

    def __init__(self, reason: str = ""):
        super().__init__(INVALID_URL_MESSAGE)
        self.reason = reason


class NotFoundError(ShortURLError):
    """Raised when an identifier has no mapping."""

    def __init__(self, short_url=None):
        super().__init__(NOT_FOUND_MESSAGE)
        self.short_url = short_url


class StoreErrorKind(str, Enum):
    CONFLICT = "conflict"
    UNAVAILABLE = "unavailable"


class StoreError(ShortURLError):
    """Raised by the store on uniqueness violations or connectivity failures."""

    def __init__(self, kind: StoreErrorKind, message: Optional[str] = None):
        super().__init__(message or f"store {kind.value}")
        self.kind = kind

    @property
    def is_conflict(self) -> bool:
        return self.kind is StoreErrorKind.CONFLICT
