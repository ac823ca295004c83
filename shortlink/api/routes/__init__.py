"""API route modules."""

from .health import router as health_router
from .urls import router as urls_router, get_shortener

__all__ = ["health_router", "urls_router", "get_shortener"]
