"""Schemas package for URL Shortener Service."""

from .url import ShortenResponse, HealthResponse

__all__ = ["ShortenResponse", "HealthResponse"]
