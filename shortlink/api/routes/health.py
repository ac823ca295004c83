"""Health check API routes."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ...schemas.url import HealthResponse
from ...services.shortener import URLShortenerService
from .urls import get_shortener

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse, "description": "Store unreachable"}},
    summary="Health check",
)
def health_check(shortener: URLShortenerService = Depends(get_shortener)):
    """Health check endpoint.

    Returns:
        Health status.
    """
    if not shortener.store.ping():
        return JSONResponse(status_code=503, content={"status": "unhealthy"})
    return {"status": "healthy"}
