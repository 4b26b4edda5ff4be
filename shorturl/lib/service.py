"""Business logic service for URL shortener."""

import logging
from typing import Optional, Dict, Any

from .database.base import MappingStoreBase
from .database.cache import RedisCache
from .database.models import UrlMapping
from .common.validators import Resolver, resolve_hostname, validate_url, parse_short_url
from .errors import NotFoundError


DEFAULT_COUNTER_NAME = "url_count"

# Ids are stored as BIGINT
MAX_SHORT_URL = 2 ** 63 - 1


class ShorteningService:
    """Service layer for URL shortening business logic.

    Create runs validate -> lookup existing -> allocate id -> insert.
    Nothing here takes a lock: id uniqueness comes from the store's atomic
    counter and its primary key on id.
    """

    def __init__(
        self,
        db: MappingStoreBase,
        cache: Optional[RedisCache] = None,
        resolver: Resolver = resolve_hostname,
        logger: Optional[logging.Logger] = None,
        counter_name: str = DEFAULT_COUNTER_NAME,
        dns_timeout_seconds: Optional[float] = 5.0,
    ):
        """Initialize URL shortener service.

        Args:
            db: Store instance
            cache: Optional resolve cache
            resolver: Coroutine function used for hostname lookups
            logger: Optional logger
            counter_name: Name of the id sequence counter
            dns_timeout_seconds: Hostname lookup timeout
        """
        self.db = db
        self.cache = cache
        self.resolver = resolver
        self.logger = logger or logging.getLogger(__name__)
        self.counter_name = counter_name
        self.dns_timeout_seconds = dns_timeout_seconds

    async def create_short_url(self, original_url: Any) -> UrlMapping:
        """Create (or return the existing) short URL for an original URL.

        Args:
            original_url: The submitted URL

        Returns:
            The mapping for this URL

        Raises:
            InvalidUrlError: If validation fails
            StoreError: If the store fails
        """
        await validate_url(original_url, self.resolver, self.dns_timeout_seconds)

        existing = await self.db.find_by_original_url(original_url)
        if existing:
            self.logger.debug(f"Existing short URL: {existing.id} -> {original_url}")
            return existing

        # Lookup and insert are not atomic: two concurrent creates of the
        # same URL can both get here and both insert.
        short_url = await self.db.next_value(self.counter_name)
        mapping = await self.db.insert(UrlMapping(id=short_url, original_url=original_url))

        if self.cache:
            await self.cache.set(mapping.id, mapping.original_url)

        self.logger.info(f"Created short URL: {mapping.id} -> {original_url}")
        return mapping

    async def resolve_short_url(self, raw_short_url: Any) -> UrlMapping:
        """Resolve an identifier to its mapping.

        Args:
            raw_short_url: The identifier as received (usually a path segment)

        Returns:
            The stored mapping

        Raises:
            InvalidUrlError: If the identifier is not a finite number
            NotFoundError: If no mapping exists
            StoreError: If the store fails
        """
        value = parse_short_url(raw_short_url)

        # Fractional or out-of-range ids can never match a stored row
        if not value.is_integer() or abs(value) > MAX_SHORT_URL:
            raise NotFoundError(raw_short_url)

        short_url = int(value)
        mapping = await self.get_mapping(short_url)

        if mapping is None:
            self.logger.warning(f"Short URL not found: {raw_short_url}")
            raise NotFoundError(raw_short_url)

        return mapping

    async def get_mapping(self, short_url: int) -> Optional[UrlMapping]:
        """Look up a mapping by id, cache first."""
        if self.cache:
            cached_url = await self.cache.get(short_url)
            if cached_url:
                self.logger.debug(f"Cache hit for {short_url}")
                return UrlMapping(id=short_url, original_url=cached_url)

        mapping = await self.db.find_by_id(short_url)

        if mapping and self.cache:
            await self.cache.set(mapping.id, mapping.original_url)

        return mapping

    async def count_short_urls(self) -> int:
        return await self.db.count_mappings()

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        db_healthy = await self.db.health_check()
        cache_healthy = await self.cache.ping() if self.cache else True

        return {
            "database": db_healthy,
            "cache": cache_healthy,
            "overall": db_healthy and cache_healthy,
        }

    async def close(self) -> None:
        """Close service connections."""
        await self.db.close()
        if self.cache:
            await self.cache.close()
