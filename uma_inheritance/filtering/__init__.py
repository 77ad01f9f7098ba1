"""Client-side filtering of search results by grandparent lineage."""

from .ancestor_filter import filter_results, matches

__all__ = ["filter_results", "matches"]
