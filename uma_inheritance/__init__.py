"""Inheritance search for Umamusume: Pretty Derby backed by the uma.moe API."""

__version__ = "0.1.0"

from .ingest import PageResult, SearchResult, UmaMoeClient
from .storage import PageCache
from .filtering import filter_results, matches
from .query_gen import CacheKey, SearchQuery, resolve_sort
from .retrieval import BatchSearch
from .orchestrator import InheritanceSession, SessionFinishedError, SessionStatus, WindowOutcome

__all__ = [
    "__version__",
    "PageResult",
    "SearchResult",
    "UmaMoeClient",
    "PageCache",
    "filter_results",
    "matches",
    "CacheKey",
    "SearchQuery",
    "resolve_sort",
    "BatchSearch",
    "InheritanceSession",
    "SessionFinishedError",
    "SessionStatus",
    "WindowOutcome",
]
