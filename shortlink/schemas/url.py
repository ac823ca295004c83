"""Response schemas for URL Shortener Service."""

from pydantic import BaseModel


class ShortenResponse(BaseModel):
    """Response model for a shortened URL."""

    shortened_url: str


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
