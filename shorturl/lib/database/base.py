"""Abstract base class for URL shortener store implementations."""

from abc import ABC, abstractmethod
from typing import Optional

from .models import UrlMapping, SequenceCounter


class MappingStoreBase(ABC):
    """Durable store for id -> URL mappings and the id sequence counter.

    Every method raises StoreError when the backing store fails; lookups
    never hide a storage failure behind a None result.
    """

    def __init__(self, db_config: str):
        """Initialize store.

        Args:
            db_config: Database connection string
        """
        self.db_config = db_config

    @abstractmethod
    async def connect(self) -> None:
        """Open connections and make sure the schema exists."""
        pass

    @abstractmethod
    async def next_value(self, counter_name: str) -> int:
        """Atomically increment a named counter and return the new value.

        A counter that does not exist yet is created, so the first call
        returns 1. Two callers never observe the same value.

        Args:
            counter_name: Name of the counter row

        Returns:
            The post-increment value
        """
        pass

    @abstractmethod
    async def get_counter(self, counter_name: str) -> Optional[SequenceCounter]:
        """Read a counter without changing it.

        Args:
            counter_name: Name of the counter row

        Returns:
            The counter, or None if it was never incremented
        """
        pass

    @abstractmethod
    async def find_by_original_url(self, original_url: str) -> Optional[UrlMapping]:
        """Look up a mapping by exact original URL.

        Args:
            original_url: The URL as submitted

        Returns:
            The mapping with the lowest id for that URL, or None
        """
        pass

    @abstractmethod
    async def find_by_id(self, short_url: int) -> Optional[UrlMapping]:
        """Look up a mapping by its sequential id.

        Args:
            short_url: The identifier

        Returns:
            The mapping if found, None otherwise
        """
        pass

    @abstractmethod
    async def insert(self, mapping: UrlMapping) -> UrlMapping:
        """Persist a new mapping.

        Args:
            mapping: The mapping to store

        Returns:
            The stored mapping

        Raises:
            StoreError: CONFLICT if the id exists, UNAVAILABLE on failure
        """
        pass

    @abstractmethod
    async def count_mappings(self) -> int:
        """Return the number of stored mappings."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close store connections."""
        pass
