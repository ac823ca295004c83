"""Services package for URL Shortener Service."""

from .shortener import URLShortenerService

__all__ = ["URLShortenerService"]
