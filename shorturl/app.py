#!/usr/bin/env python3
"""
Main entry point for URL shortener service.

Concurrency: requests are handled concurrently on one asyncio event loop
(FastAPI + asyncpg connection pool + redis.asyncio). Short URL uniqueness
relies on the database's atomic counter upsert, not on in-process locks.

Usage:
    python -m shorturl.app

Environment variables:
    DATABASE_URL - PostgreSQL connection URL (required)
    REDIS_URL - Redis connection URL (optional resolve cache)
    PORT - Port to listen on (default 3000)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from pydantic import ValidationError

from .config import load_config
from .lib.database.postgres import PostgresStore
from .lib.database.cache import RedisCache
from .lib.errors import StoreError
from .lib.service import ShorteningService
from .lib.common.logging_config import setup_logging
from .web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting URL shortener service...")

    db = PostgresStore(
        db_config=config.database_url,
        pool_max_size=config.pool_max_size,
        connection_timeout_seconds=config.connection_timeout_seconds,
        logger=logger,
    )

    # The service must not start without its store
    try:
        await db.connect()
    except StoreError as e:
        logger.critical(f"Cannot connect to database: {e}")
        await db.close()
        raise

    if config.redis_url:
        cache = RedisCache(
            redis_url=config.redis_url,
            ttl_seconds=config.cache_ttl_seconds,
            logger=logger,
        )
        await cache.connect()
    else:
        logger.info("Redis caching disabled")
        cache = None

    service = ShorteningService(
        db=db,
        cache=cache,
        logger=logger,
        counter_name=config.counter_name,
        dns_timeout_seconds=config.dns_timeout_seconds,
    )

    app.state.db = db
    app.state.cache = cache
    app.state.service = service

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down URL shortener service...")
    await service.close()
    logger.info("Service stopped")


def main():
    """Main entry point."""
    try:
        config = load_config()
    except ValidationError as e:
        logger = setup_logging()
        logger.critical(f"Invalid configuration (is DATABASE_URL set?): {e}")
        sys.exit(1)

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("URL Shortener Service")
    logger.info(f"Configuration: {config.safe_dump()}")

    app = create_app(
        db_instance=None,  # Set in lifespan
        cache_instance=None,
        service_instance=None,
        config=config,
    )
    app.state.config = config
    app.state.logger = logger
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        lifespan="on",
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    logger.info(f"Starting server on {config.host}:{config.port}")
    server.run()

    if not server.started:
        logger.critical("Server failed to start")
        sys.exit(1)


if __name__ == "__main__":
    main()
