"""Windowed retrieval of inheritance search pages.

A window is a fixed run of consecutive page numbers. All pages in a window are
requested concurrently, consulting the page cache first, and the call returns
only once every page has resolved. Results are flattened in page order and
narrowed by the grandparent filter.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from ..filtering.ancestor_filter import filter_results
from ..ingest.models import PageResult, SearchResult
from ..ingest.uma_moe import UmaMoeClient
from ..query_gen.search_query import DEFAULT_SORT, SearchQuery
from ..storage.page_cache import PageCache


logger = logging.getLogger(__name__)

WINDOW_SIZE = 10


class BatchSearch:
    """Fetches and filters one window of result pages at a time."""

    def __init__(
        self,
        client: UmaMoeClient,
        cache: Optional[PageCache] = None,
        window_size: int = WINDOW_SIZE,
        max_workers: int = WINDOW_SIZE,
    ) -> None:
        self.client = client
        self.cache = cache if cache is not None else PageCache()
        self.window_size = window_size
        self.max_workers = max_workers

    def fetch_window(
        self,
        sire_id: int,
        grand_sire_id: Optional[int] = None,
        grand_dam_id: Optional[int] = None,
        start_page: int = 1,
        sort_by: str = DEFAULT_SORT,
    ) -> List[SearchResult]:
        """Return the filtered results of pages ``start_page`` onwards.

        Never raises: an unexpected failure while fanning out is logged and
        the window is reported as empty.
        """

        query = SearchQuery(sire_id, grand_sire_id, grand_dam_id, sort_by)
        return self.fetch_window_for(query, start_page)

    def fetch_window_for(self, query: SearchQuery, start_page: int = 1) -> List[SearchResult]:
        pages = list(range(start_page, start_page + self.window_size))
        try:
            # Worker threads share the client's requests.Session and only issue GETs.
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                # ``map`` yields in submission order, i.e. page order.
                responses = list(executor.map(lambda page: self._fetch_cached(query, page), pages))

            items = [item for response in responses for item in response.items]
            results = filter_results(items, query.grand_sire_id, query.grand_dam_id)
        except Exception as exc:
            logger.error(
                "batch_search.window.failed",
                extra={"query": query.describe(), "start_page": start_page, "error": str(exc)},
            )
            return []

        logger.info(
            "batch_search.window",
            extra={
                "query": query.describe(),
                "start_page": start_page,
                "fetched": len(items),
                "matched": len(results),
            },
        )
        return results

    def _fetch_cached(self, query: SearchQuery, page: int) -> PageResult:
        key = query.cache_key(page)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        result = self.client.fetch_page(page, query.sire_id, query.sort_by)
        self.cache.set(key, result)
        return result
