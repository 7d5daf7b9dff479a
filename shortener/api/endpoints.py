"""
FastAPI Endpoints for URL Shortener Service

This module defines all REST API endpoints with minimal logic.
Endpoints only handle:
- Request parsing (Pydantic models)
- Rate limiting
- Translating service exceptions into HTTP responses
- Delegating to the service layer

Design Principles:
- Thin endpoints: all business logic lives in services
- The registry is owned by the application (app.state) and handed to
  services per request through a dependency
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from shortener.api.schemas import (
    ShortenRequest,
    ShortenResponse,
    ShortenedURL,
    StatsResponse,
    URLListResponse,
)
from shortener.core.exceptions import (
    DuplicateShortcodeError,
    GenerationExhausted,
    NotFoundError,
    ValidationError,
)
from shortener.core.rate_limit import limiter, RATE_LIMITS
from shortener.registry import DraftEntry, UrlRegistry
from shortener.services.redirect_service import RedirectService
from shortener.services.stats_service import StatsService, build_short_url
from shortener.services.url_service import URLShorteningService


router = APIRouter()


def get_registry(request: Request) -> UrlRegistry:
    """Return the registry owned by the running application."""
    return request.app.state.registry


def not_found(exc: NotFoundError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=str(exc)
    )


@router.post(
    "/shorturls",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create short URLs",
    description="Registers a batch of long URLs; either every entry is created or none is"
)
@limiter.limit(RATE_LIMITS["shorten"])
async def create_short_urls(
    request: Request,  # Required for rate limiting (slowapi expects parameter named 'request')
    body: ShortenRequest,
    registry: UrlRegistry = Depends(get_registry)
) -> ShortenResponse:
    """
    Create short URLs for every entry of a batch.

    Raises:
        HTTPException 400: If any entry fails validation (per-field errors)
        HTTPException 409: If a shortcode repeats or is already in use
        HTTPException 503: If a unique shortcode could not be generated
        HTTPException 429: If rate limit exceeded
    """
    drafts = [
        DraftEntry(
            long_url=entry.long_url,
            shortcode=entry.shortcode,
            validity_minutes=entry.validity_minutes,
        )
        for entry in body.urls
    ]

    try:
        records = URLShorteningService(registry).register_batch(drafts)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": e.message,
                "errors": [error.to_dict() for error in e.errors],
            }
        )
    except DuplicateShortcodeError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "message": str(e),
                "scope": e.scope,
                "shortcodes": e.shortcodes,
            }
        )
    except GenerationExhausted as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e)
        )

    return ShortenResponse(urls=[
        ShortenedURL(
            short_code=record.shortcode,
            short_url=build_short_url(record.shortcode),
            long_url=record.long_url,
            created_at=record.created_at,
            expires_at=record.expires_at,
        )
        for record in records
    ])


@router.get(
    "/shorturls",
    response_model=URLListResponse,
    summary="List short URLs",
    description="Returns every registered short URL with click counts"
)
@limiter.limit(RATE_LIMITS["stats"])
async def list_short_urls(
    request: Request,  # Required for rate limiting
    registry: UrlRegistry = Depends(get_registry)
) -> URLListResponse:
    return URLListResponse(urls=StatsService(registry).list_urls())


@router.get(
    "/shorturls/{short_code}",
    response_model=StatsResponse,
    summary="Get URL statistics",
    description="Returns one short URL with its full click history"
)
@limiter.limit(RATE_LIMITS["stats"])
async def get_url_stats(
    short_code: str,
    request: Request,  # Required for rate limiting
    registry: UrlRegistry = Depends(get_registry)
) -> StatsResponse:
    """
    Get statistics for a short URL.

    Raises:
        HTTPException 404: If short code not found
        HTTPException 429: If rate limit exceeded
    """
    try:
        stats = StatsService(registry).get_stats(short_code)
    except NotFoundError as e:
        raise not_found(e)

    return StatsResponse(**stats)


@router.get(
    "/{short_code}",
    status_code=status.HTTP_302_FOUND,
    summary="Redirect to original URL",
    description="Records a click for the short code and redirects to the original long URL"
)
@limiter.limit(RATE_LIMITS["redirect"])
async def redirect_to_url(
    short_code: str,
    request: Request,
    registry: UrlRegistry = Depends(get_registry)
) -> RedirectResponse:
    """
    Record a click and redirect to the original URL.

    The click source is the Referer header, or "Direct" when absent.

    Raises:
        HTTPException 404: If short code not found
        HTTPException 429: If rate limit exceeded
    """
    referrer = request.headers.get("referer") or request.headers.get("referrer")

    try:
        directive = RedirectService(registry).record_click(short_code, referrer=referrer)
    except NotFoundError as e:
        raise not_found(e)

    return RedirectResponse(
        url=directive.target_url,
        status_code=status.HTTP_302_FOUND
    )
