"""Storage layer for URL shortener."""

from .base import MappingStoreBase
from .postgres import PostgresStore
from .cache import RedisCache
from .models import UrlMapping, SequenceCounter

__all__ = [
    "MappingStoreBase",
    "PostgresStore",
    "RedisCache",
    "UrlMapping",
    "SequenceCounter",
]
