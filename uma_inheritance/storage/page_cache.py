"""In-memory memoization of fetched search pages.

Entries live for as long as the owning process; nothing is evicted or persisted.
A CLI session is short, so the cache is left unbounded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from ..ingest.models import PageResult
from ..query_gen.search_query import CacheKey


@dataclass
class PageCache:
    """Process-lifetime store of ``PageResult`` objects keyed by ``CacheKey``."""

    _pages: Dict[CacheKey, PageResult] = field(default_factory=dict, repr=False)

    def get(self, key: CacheKey) -> Optional[PageResult]:
        return self._pages.get(key)

    def set(self, key: CacheKey, value: PageResult) -> None:
        # Single assignment; concurrent writers to one key: last write wins.
        self._pages[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._pages

    def __len__(self) -> int:
        return len(self._pages)
