"""Request logging for the short URL endpoints."""

import time
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from typing import Callable, Optional

from ...lib.common.logging_config import get_logger


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request with its outcome.

    Redirects name the short URL and its target, so the log alone shows
    which ids are followed. Requests slower than ``slow_request_ms`` are
    logged as warnings.
    """

    def __init__(
        self,
        app,
        logger: logging.Logger = None,
        slow_request_ms: float = 1000.0,
    ):
        super().__init__(app)
        self.logger = logger or get_logger("shorturl.web")
        self.slow_request_ms = slow_request_ms

    async def dispatch(self, request: Request, call_next: Callable):
        start_time = time.perf_counter()

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        client_ip = request.client.host if request.client else "unknown"

        message = (
            f"{request.method} {request.url.path} from {client_ip} - "
            f"{response.status_code} in {duration_ms:.2f}ms"
        )
        outcome = describe_outcome(request, response)
        if outcome:
            message += f" - {outcome}"

        level = logging.WARNING if duration_ms >= self.slow_request_ms else logging.INFO
        self.logger.log(level, message)

        return response


def describe_outcome(request: Request, response: Response) -> Optional[str]:
    """Summarize what a short URL request did, from the matched endpoint."""
    endpoint = getattr(request.scope.get("endpoint"), "__name__", None)
    short_url = request.scope.get("path_params", {}).get("short_url")
    code = response.status_code

    if endpoint == "redirect_short_url":
        if code == 302:
            return f"short_url {short_url} -> {response.headers.get('location')}"
        if code == 404:
            return f"short_url {short_url} not found"

    if code == 500:
        return "server error"
    return None
