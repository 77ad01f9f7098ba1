"""Ingestion package providing access to the uma.moe search API."""

from .models import Lineage, PageResult, SearchResult, SupportCard
from .uma_moe import UmaMoeClient

__all__ = ["Lineage", "PageResult", "SearchResult", "SupportCard", "UmaMoeClient"]
