"""Core business logic for URL shortener."""

from .service import ShorteningService
from .errors import InvalidUrlError, NotFoundError, StoreError, StoreErrorKind

__all__ = [
    "ShorteningService",
    "InvalidUrlError",
    "NotFoundError",
    "StoreError",
    "StoreErrorKind",
]
