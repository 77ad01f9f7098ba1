"""Tests for windowed page retrieval."""

from uma_inheritance.ingest.models import PageResult
from uma_inheritance.ingest.uma_moe import UmaMoeClient
from uma_inheritance.query_gen.search_query import SearchQuery
from uma_inheritance.retrieval.batch_search import BatchSearch
from uma_inheritance.storage.page_cache import PageCache

from conftest import FakeClient, FakeResponse, make_item, make_result


def test_window_covers_ten_pages_from_start():
    """A window requests exactly the ten pages beginning at ``start_page``."""
    client = FakeClient()
    BatchSearch(client).fetch_window(1001, start_page=21)
    assert sorted(call[0] for call in client.calls) == list(range(21, 31))


def test_results_flattened_in_page_order():
    """Items come back ordered by page, then by position within the page."""
    pages = {
        3: [make_result("c1"), make_result("c2")],
        1: [make_result("a1")],
        2: [make_result("b1"), make_result("b2")],
    }
    results = BatchSearch(FakeClient(pages)).fetch_window(1001)
    assert [r.account_id for r in results] == ["a1", "b1", "b2", "c1", "c2"]


def test_grandparent_filter_applied():
    """Only records whose parent pair matches survive."""
    pages = {1: [make_result("a", 5, 9), make_result("b", 5, 3), make_result("c", 9, 5)]}
    results = BatchSearch(FakeClient(pages)).fetch_window(1001, 5, 9)
    assert [r.account_id for r in results] == ["a", "c"]


def test_repeated_window_served_from_cache():
    """Fetching the same window twice hits the network once per page."""
    client = FakeClient({1: [make_result("a")]})
    search = BatchSearch(client, cache=PageCache())

    first = search.fetch_window(1001, start_page=1)
    second = search.fetch_window(1001, start_page=1)

    assert len(client.calls) == 10
    assert first == second
    assert len(search.cache) == 10


def test_cache_keys_include_filter_and_sort():
    """A different filter or sort is fetched separately."""
    client = FakeClient()
    search = BatchSearch(client)
    search.fetch_window(1001)
    search.fetch_window(1001, 5)
    search.fetch_window(1001, sort_by="win_count")
    assert len(client.calls) == 30


def test_cached_page_is_not_refetched():
    """A page already present in an injected cache is used as-is."""
    cache = PageCache()
    cache.set(
        SearchQuery(1001).cache_key(1),
        PageResult(items=[make_result("cached")], total=1, page=1, limit=12, total_pages=1),
    )
    client = FakeClient()

    results = BatchSearch(client, cache=cache).fetch_window(1001)

    assert [r.account_id for r in results] == ["cached"]
    assert sorted(call[0] for call in client.calls) == list(range(2, 11))


def test_unexpected_failure_degrades_to_empty():
    """An exception escaping a page fetch empties the whole window."""
    client = FakeClient({1: [make_result("a")]}, fail_pages={4})
    assert BatchSearch(client).fetch_window(1001) == []


def test_lone_grand_dam_applies_no_filter():
    """A granddam without a grandsire leaves the window unfiltered."""
    client = FakeClient({1: [make_result("a", 5, 9), make_result("b", 3, 4)]})
    results = BatchSearch(client).fetch_window(1001, None, 9)
    assert [r.account_id for r in results] == ["a", "b"]


class PagedSession:
    """Answers each request according to its ``page`` parameter."""

    def __init__(self, payloads):
        self.headers = {}
        self.payloads = payloads

    def get(self, url, params=None, timeout=None):
        return FakeResponse(payload=self.payloads.get(params["page"], {"items": []}))


def test_malformed_page_does_not_sink_window():
    """One unparseable page degrades alone; the rest of the window survives."""
    session = PagedSession(
        {
            1: {"items": [make_item("a")], "total": 1, "page": 1, "limit": 12, "total_pages": 1},
            2: {"items": "oops"},
            3: {"items": [42]},
        }
    )
    search = BatchSearch(UmaMoeClient(session=session, backoff_seconds=0))

    results = search.fetch_window(1001)

    assert [r.account_id for r in results] == ["a"]
    assert search.cache.get(SearchQuery(1001).cache_key(2)) == PageResult.empty(2)
