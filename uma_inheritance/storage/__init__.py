"""Storage package exposing the in-memory page cache."""

from .page_cache import PageCache

__all__ = ["PageCache"]
