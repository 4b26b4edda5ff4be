#!/usr/bin/env python3
"""
Command-line interface for URL shortener service.

Talks to the database directly, running the same create/resolve logic as
the HTTP API.

Usage:
    python shorturl_cli.py shorten <url>
    python shorturl_cli.py get <short_url>
    python shorturl_cli.py health
"""

import argparse
import asyncio
import json
import sys
import os
from typing import Optional

# Add repository root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from shorturl.lib.database.postgres import PostgresStore
from shorturl.lib.database.cache import RedisCache
from shorturl.lib.errors import InvalidUrlError, NotFoundError, StoreError
from shorturl.lib.service import ShorteningService, DEFAULT_COUNTER_NAME
from shorturl.lib.common.logging_config import setup_logging


def emit(payload: dict, error: bool = False) -> int:
    print(json.dumps(payload, indent=2), file=sys.stderr if error else sys.stdout)
    return 1 if error else 0


class ShortURLCLI:
    """Command-line interface for URL shortener."""

    def __init__(self, db_url: str, redis_url: Optional[str] = None, verbose: bool = False):
        """Initialize CLI."""
        self.db_url = db_url
        self.redis_url = redis_url
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.db = None
        self.cache = None
        self.service = None

    async def initialize(self):
        """Initialize database and service."""
        self.db = PostgresStore(db_config=self.db_url, logger=self.logger)
        await self.db.connect()

        if self.redis_url:
            self.cache = RedisCache(redis_url=self.redis_url, logger=self.logger)
            await self.cache.connect()

        self.service = ShorteningService(db=self.db, cache=self.cache, logger=self.logger)

    async def cleanup(self):
        """Cleanup resources."""
        if self.service:
            await self.service.close()
        elif self.db:
            await self.db.close()

    async def shorten(self, url: str) -> int:
        """Shorten a URL."""
        try:
            mapping = await self.service.create_short_url(url)
        except InvalidUrlError as e:
            return emit({"success": False, "error": str(e), "reason": e.reason}, error=True)

        return emit({"success": True, **mapping.to_dict()})

    async def get(self, short_url: str) -> int:
        """Get original URL for a short URL."""
        try:
            mapping = await self.service.resolve_short_url(short_url)
        except (InvalidUrlError, NotFoundError) as e:
            return emit({"success": False, "error": str(e)}, error=True)

        return emit({"success": True, **mapping.to_dict()})

    async def health(self) -> int:
        """Check service health."""
        health_status = await self.service.health_check()
        counter = await self.db.get_counter(DEFAULT_COUNTER_NAME)

        return emit(
            {
                "success": health_status["overall"],
                "health": health_status,
                "total_urls": await self.service.count_short_urls(),
                "last_short_url": counter.value if counter else 0,
            },
            error=not health_status["overall"],
        )


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="URL Shortener CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL
  %(prog)s shorten https://example.com/long/url

  # Get original URL
  %(prog)s get 1

  # Check health
  %(prog)s health
        """
    )

    parser.add_argument(
        "--db-url",
        default=os.getenv("DATABASE_URL"),
        help="PostgreSQL connection URL (default: from DATABASE_URL env)"
    )

    parser.add_argument(
        "--redis-url",
        default=os.getenv("REDIS_URL"),
        help="Redis connection URL (optional, default: from REDIS_URL env)"
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")

    get_parser = subparsers.add_parser("get", help="Get original URL")
    get_parser.add_argument("short_url", help="Short URL identifier to look up")

    subparsers.add_parser("health", help="Check service health")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    if not args.db_url:
        parser.error("--db-url or DATABASE_URL is required")

    cli = ShortURLCLI(
        db_url=args.db_url,
        redis_url=args.redis_url,
        verbose=args.verbose,
    )

    try:
        await cli.initialize()

        if args.command == "shorten":
            return await cli.shorten(args.url)
        elif args.command == "get":
            return await cli.get(args.short_url)
        else:
            return await cli.health()

    except StoreError as e:
        return emit({"success": False, "error": f"database {e.kind.value}: {e}"}, error=True)
    finally:
        await cli.cleanup()


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
