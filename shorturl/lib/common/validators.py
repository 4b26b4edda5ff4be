"""Validation utilities for URL shortener."""

import asyncio
import logging
import math
from typing import Any, Awaitable, Callable, Mapping, Optional
from urllib.parse import urlparse

from ..errors import InvalidUrlError


ALLOWED_SCHEMES = ("http", "https")

# Request body fields that may carry the URL, in priority order
URL_FIELDS = ("url", "original_url", "input")

Resolver = Callable[[str], Awaitable[Any]]

logger = logging.getLogger(__name__)


def extract_candidate_url(body: Optional[Mapping[str, Any]]) -> Optional[str]:
    """Pick the submitted URL out of a request body.

    The first of ``url``, ``original_url`` and ``input`` holding a non-empty
    value wins. Non-string values count as no input.
    """
    if not body:
        return None

    for field in URL_FIELDS:
        value = body.get(field)
        if value:
            return value if isinstance(value, str) else None
    return None


def extract_hostname(candidate: Any) -> str:
    """Check that a candidate is an absolute http(s) URL and return its hostname.

    Raises:
        InvalidUrlError: If the URL is empty, holds characters a text
            column cannot store, is unparsable, uses another scheme or has
            no hostname
    """
    if not candidate or not isinstance(candidate, str):
        raise InvalidUrlError("URL is required")

    # Neither can be stored in a PostgreSQL text column
    if "\x00" in candidate:
        raise InvalidUrlError("URL contains a NUL character")
    try:
        candidate.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidUrlError("URL contains a lone surrogate") from e

    try:
        parsed = urlparse(candidate)
        hostname = parsed.hostname
    except ValueError as e:
        raise InvalidUrlError(f"unparsable URL: {e}") from e

    if parsed.scheme not in ALLOWED_SCHEMES:
        raise InvalidUrlError(f"scheme {parsed.scheme!r} is not http or https")

    if not hostname:
        raise InvalidUrlError("URL has no hostname")

    return hostname


async def resolve_hostname(hostname: str) -> None:
    """Resolve a hostname with the system resolver.

    Raises:
        OSError: If the lookup fails (socket.gaierror for unknown hosts)
    """
    loop = asyncio.get_running_loop()
    await loop.getaddrinfo(hostname, None)


async def validate_url(
    candidate: Any,
    resolver: Resolver = resolve_hostname,
    timeout: Optional[float] = None,
) -> str:
    """Validate a submitted URL and check its hostname resolves.

    Parse failures and resolution failures raise the same error; only the
    log line tells them apart.

    Args:
        candidate: The submitted value
        resolver: Coroutine function doing the name lookup
        timeout: Optional lookup timeout in seconds

    Returns:
        The URL, unchanged

    Raises:
        InvalidUrlError: If the URL is malformed or the host does not resolve
    """
    try:
        hostname = extract_hostname(candidate)
    except InvalidUrlError as e:
        logger.debug(f"Rejected {candidate!r}: {e.reason}")
        raise

    try:
        await asyncio.wait_for(resolver(hostname), timeout)
    except (OSError, UnicodeError, asyncio.TimeoutError) as e:
        logger.debug(f"Rejected {candidate!r}: lookup of {hostname} failed: {e!r}")
        raise InvalidUrlError(f"cannot resolve {hostname}") from e

    return candidate


def parse_short_url(raw: Any) -> float:
    """Parse a short URL path parameter as a number.

    Accepts surrounding whitespace, decimal, exponent and 0x/0o/0b forms.

    Raises:
        InvalidUrlError: If the value is not a finite number
    """
    text = str(raw).strip()

    if not text:
        return 0.0

    if "_" in text:
        raise InvalidUrlError(f"not a number: {raw!r}")

    try:
        value = float(text)
    except ValueError:
        if text[:2].lower() not in ("0x", "0o", "0b"):
            raise InvalidUrlError(f"not a number: {raw!r}")
        try:
            value = float(int(text, 0))
        except OverflowError:
            value = math.inf
        except ValueError as e:
            raise InvalidUrlError(f"not a number: {raw!r}") from e

    if not math.isfinite(value):
        raise InvalidUrlError(f"not a finite number: {raw!r}")

    return value
