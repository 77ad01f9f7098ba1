"""Tests for the in-memory page cache."""

from uma_inheritance.ingest.models import PageResult
from uma_inheritance.query_gen.search_query import SearchQuery
from uma_inheritance.storage.page_cache import PageCache


def test_get_miss_returns_none():
    """Unknown keys are absent."""
    assert PageCache().get(SearchQuery(1001).cache_key(1)) is None


def test_set_then_get():
    """A stored page is returned for an equal key."""
    cache = PageCache()
    page = PageResult.empty(1)
    cache.set(SearchQuery(1001).cache_key(1), page)

    assert cache.get(SearchQuery(1001).cache_key(1)) is page
    assert SearchQuery(1001).cache_key(1) in cache
    assert len(cache) == 1


def test_last_write_wins():
    """Writing a key twice keeps the later page."""
    cache = PageCache()
    key = SearchQuery(1001, 5).cache_key(2)
    cache.set(key, PageResult.empty(2))
    newer = PageResult(items=[], total=3, page=2, limit=12, total_pages=1)
    cache.set(key, newer)
    assert cache.get(key) is newer
    assert len(cache) == 1
