"""Common utilities for URL shortener."""

from .validators import (
    validate_url,
    resolve_hostname,
    extract_candidate_url,
    parse_short_url,
)
from .logging_config import setup_logging

__all__ = [
    "validate_url",
    "resolve_hostname",
    "extract_candidate_url",
    "parse_short_url",
    "setup_logging",
]
