"""Utils package for URL Shortener Service."""

from .shortener import (
    ALPHABET,
    RESERVED_SLUGS,
    SlugAssigner,
    HashSlugAssigner,
    RandomSlugAssigner,
    build_assigner,
    create_short_url,
)

__all__ = [
    "ALPHABET",
    "RESERVED_SLUGS",
    "SlugAssigner",
    "HashSlugAssigner",
    "RandomSlugAssigner",
    "build_assigner",
    "create_short_url",
]
