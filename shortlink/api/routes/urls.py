"""URL shortening API routes.

This module contains the endpoints for URL operations:
- Create short URL (POST /shorten)
- Redirect to original URL (GET /{slug})

The endpoints are plain functions so blocking store calls run in the
threadpool instead of on the event loop.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse

from ...core.exceptions import NotFoundError, SlugConflictError, StoreError
from ...models.url import ShortenRequest, ErrorResponse
from ...schemas.url import ShortenResponse
from ...services.shortener import URLShortenerService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["URLs"])


def get_shortener(request: Request) -> URLShortenerService:
    """Get the shortener service for dependency injection.

    Args:
        request: FastAPI request object.

    Returns:
        Service instance attached to the application.
    """
    return request.app.state.shortener


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    responses={
        200: {"description": "Short URL created or reused"},
        400: {"model": ErrorResponse, "description": "Invalid request body"},
        409: {"model": ErrorResponse, "description": "No free slug could be assigned"},
        500: {"model": ErrorResponse, "description": "Error storing shortened URL"},
    },
    summary="Create a short URL",
    description="Create a short URL for a long URL, or return the existing one.",
)
def shorten_url(
    body: ShortenRequest,
    shortener: URLShortenerService = Depends(get_shortener),
) -> ShortenResponse:
    """Create a short URL from a long URL.

    Args:
        body: Request body with the URL.
        shortener: Shortener service.

    Returns:
        The shortened URL.
    """
    try:
        mapping = shortener.shorten(body.url)
    except SlugConflictError as e:
        logger.error(str(e))
        raise HTTPException(status_code=409, detail="Could not assign a short URL")
    except StoreError as e:
        logger.error(f"Error storing URL: {e}")
        raise HTTPException(status_code=500, detail="Error storing shortened URL")

    return ShortenResponse(shortened_url=shortener.short_url(mapping.slug))


@router.api_route(
    "/shorten",
    methods=["GET", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
def shorten_method_not_allowed(request: Request) -> None:
    """Reject every method except POST on /shorten."""
    logger.warning(f"Method {request.method} is not supported on /shorten")
    raise HTTPException(
        status_code=405,
        detail="Method is not supported.",
        headers={"Allow": "POST"},
    )


@router.get(
    "/{slug:path}",
    response_class=RedirectResponse,
    status_code=307,
    responses={
        307: {"description": "Redirect to original URL"},
        404: {"model": ErrorResponse, "description": "Short URL not found"},
    },
    summary="Redirect to original URL",
    description="Redirect to the original URL associated with the slug.",
)
def redirect_to_url(
    slug: str,
    shortener: URLShortenerService = Depends(get_shortener),
) -> RedirectResponse:
    """Redirect to the original URL.

    Args:
        slug: The path after the leading slash.
        shortener: Shortener service.

    Returns:
        Redirect response to original URL.
    """
    try:
        original_url = shortener.resolve(slug)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="URL not found")
    except StoreError as e:
        logger.error(f"Error querying URL: {e}")
        raise HTTPException(status_code=500, detail="Error querying URL")

    return RedirectResponse(url=original_url, status_code=307)
