"""Configuration management for URL shortener."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field

from .lib.common.logging_config import mask_credentials


class Config(BaseSettings):
    """Application configuration."""

    # Database settings
    database_url: str = Field(
        ...,
        description="PostgreSQL connection URL (required)"
    )

    pool_max_size: int = Field(
        default=10,
        ge=1,
        description="Maximum size of the database connection pool"
    )

    connection_timeout_seconds: int = Field(
        default=30,
        description="Database connect and command timeout in seconds"
    )

    # Redis settings (optional)
    redis_url: Optional[str] = Field(
        default=None,
        description="Redis connection URL for caching resolved short URLs"
    )

    cache_ttl_seconds: int = Field(
        default=3600,
        description="Cache TTL in seconds"
    )

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=3000,
        description="Port to listen on"
    )

    # URL shortener settings
    counter_name: str = Field(
        default="url_count",
        description="Name of the durable counter that allocates short URLs"
    )

    dns_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Timeout for the hostname lookup done during validation"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }

    def safe_dump(self) -> dict:
        """Settings with credentials masked, for logging."""
        data = self.model_dump()
        data["database_url"] = mask_credentials(self.database_url)
        if self.redis_url:
            data["redis_url"] = mask_credentials(self.redis_url)
        return data


def load_config(**overrides) -> Config:
    """Load configuration from environment.

    Raises:
        pydantic.ValidationError: If DATABASE_URL is missing or a value is invalid
    """
    return Config(**overrides)
