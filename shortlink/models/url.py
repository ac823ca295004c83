"""Pydantic models for URL Shortener Service."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ShortenRequest(BaseModel):
    """Request body for shortening a URL."""

    url: str = Field(..., min_length=1, description="The original long URL to shorten")

    @field_validator("url")
    @classmethod
    def reject_nul(cls, value: str) -> str:
        """NUL cannot be stored in a PostgreSQL text column."""
        if "\x00" in value:
            raise ValueError("URL must not contain NUL characters")
        return value


class URLMapping(BaseModel):
    """A stored slug to URL mapping."""

    model_config = ConfigDict(frozen=True)

    slug: str
    original_url: str


class ErrorResponse(BaseModel):
    """Model for error responses."""

    detail: str
    error_code: Optional[str] = None
