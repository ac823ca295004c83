"""URL store implementations."""

from .base import URLStore
from .memory import MemoryURLStore
from .sql import SQLURLStore

__all__ = ["URLStore", "MemoryURLStore", "SQLURLStore"]
