"""Windowed, cached retrieval of search result pages."""

from .batch_search import BatchSearch

__all__ = ["BatchSearch"]
