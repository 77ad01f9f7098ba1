"""Query construction for inheritance searches."""

from .search_query import SORT_ALIASES, SORT_FIELDS, CacheKey, SearchQuery, resolve_sort

__all__ = ["SORT_ALIASES", "SORT_FIELDS", "CacheKey", "SearchQuery", "resolve_sort"]
