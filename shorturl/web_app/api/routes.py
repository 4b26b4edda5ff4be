"""API routes implementation."""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException
from datetime import datetime, timezone

from .schemas import (
    ShortURLResponse,
    ErrorResponse,
    GreetingResponse,
    HealthResponse,
)
from ...lib.common.validators import extract_candidate_url
from ...lib.errors import (
    InvalidUrlError,
    NotFoundError,
    StoreError,
    INVALID_URL_MESSAGE,
    NOT_FOUND_MESSAGE,
    SERVER_ERROR_MESSAGE,
)

router = APIRouter()

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def error_response(message: str, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


async def read_request_body(request: Request) -> Optional[Dict[str, Any]]:
    """Read a form-encoded or JSON body as a dict; None if absent or unreadable."""
    content_type = request.headers.get("content-type", "").lower()

    try:
        if content_type.startswith(FORM_CONTENT_TYPES):
            form = await request.form()
            return dict(form)
        body = await request.json()
    except (ValueError, HTTPException, MultiPartException) as e:
        # Starlette turns a bad multipart body into a 400 HTTPException
        logger.debug(f"Unreadable request body: {e}")
        return None

    return body if isinstance(body, dict) else None


@router.get(
    "/hello",
    response_model=GreetingResponse,
    summary="Diagnostic greeting",
)
async def hello():
    return GreetingResponse(greeting="hello API")


@router.post(
    "/shorturl",
    response_model=ShortURLResponse,
    responses={
        200: {"description": "Short URL, or {\"error\": \"invalid url\"} for rejected input"},
        500: {"model": ErrorResponse, "description": "Storage failure"},
    },
    summary="Create short URL",
    description=(
        "Shorten a URL sent as form or JSON field `url`, `original_url` or `input`. "
        "Submitting the same URL again returns the same short URL."
    ),
)
async def create_short_url(request: Request):
    """Create a short URL."""
    service = request.app.state.service

    body = await read_request_body(request)
    candidate = extract_candidate_url(body)

    try:
        mapping = await service.create_short_url(candidate)
    except InvalidUrlError as e:
        logger.info(f"Invalid URL submitted ({e.reason})")
        return error_response(INVALID_URL_MESSAGE)
    except StoreError as e:
        logger.error(f"Store error creating short URL for {candidate!r}: {e.kind.value}: {e}")
        return error_response(SERVER_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)

    return ShortURLResponse(original_url=mapping.original_url, short_url=mapping.id)


@router.get(
    "/shorturl/{short_url}",
    responses={
        200: {"model": ErrorResponse, "description": "Identifier is not a number"},
        302: {"description": "Redirect to the original URL"},
        404: {"model": ErrorResponse, "description": "No short URL with this identifier"},
        500: {"model": ErrorResponse, "description": "Storage failure"},
    },
    summary="Follow short URL",
)
async def redirect_short_url(request: Request, short_url: str):
    """Redirect to the original URL for a short URL."""
    service = request.app.state.service

    try:
        mapping = await service.resolve_short_url(short_url)
    except InvalidUrlError:
        return error_response(INVALID_URL_MESSAGE)
    except NotFoundError:
        return error_response(NOT_FOUND_MESSAGE, status.HTTP_404_NOT_FOUND)
    except StoreError as e:
        logger.error(f"Store error resolving short URL {short_url!r}: {e.kind.value}: {e}")
        return error_response(SERVER_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)

    return RedirectResponse(url=mapping.original_url, status_code=status.HTTP_302_FOUND)


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse, "description": "Unhealthy"}},
    summary="Health check",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    total_urls = 0
    if health["database"]:
        try:
            total_urls = await service.count_short_urls()
        except StoreError:
            health["database"] = False
            health["overall"] = False

    response = HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        cache="healthy" if health["cache"] else "unhealthy",
        total_urls=total_urls,
        timestamp=datetime.now(timezone.utc),
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK if health["overall"] else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response.model_dump(mode="json"),
    )
