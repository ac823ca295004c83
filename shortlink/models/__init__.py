"""Models package for URL Shortener Service."""

from .url import ShortenRequest, URLMapping, ErrorResponse

__all__ = ["ShortenRequest", "URLMapping", "ErrorResponse"]
