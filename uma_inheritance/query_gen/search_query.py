"""Search parameters for the uma.moe inheritance endpoint.

A ``SearchQuery`` pins the ancestor selection and sort order of one search
session. It renders the query string sent upstream and the key under which a
fetched page is memoized.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, NamedTuple, Optional, Union


SORT_FIELDS = (
    "parent_rank",
    "affinity_score",
    "win_count",
    "white_count",
    "last_updated",
)

SORT_ALIASES: Dict[str, str] = {
    "rank": "parent_rank",
    "affinity": "affinity_score",
    "win": "win_count",
    "sparks": "white_count",
    "latest": "last_updated",
}

DEFAULT_SORT = "parent_rank"


def resolve_sort(value: str) -> str:
    """Map a CLI alias (or a raw API field name) onto an API sort field."""

    key = (value or "").strip().lower()
    if key in SORT_ALIASES:
        return SORT_ALIASES[key]
    if key in SORT_FIELDS:
        return key
    choices = ", ".join(SORT_ALIASES)
    raise ValueError(f"unknown sort '{value}'; use one of: {choices}")


class CacheKey(NamedTuple):
    """Identity of one fetched page; ``None`` marks an unused grandparent slot."""

    sire_id: int
    grand_sire_id: Optional[int]
    grand_dam_id: Optional[int]
    sort_by: str
    page: int


@dataclass(frozen=True)
class SearchQuery:
    """Ancestor selection and ordering for a single search session."""

    sire_id: int
    grand_sire_id: Optional[int] = None
    grand_dam_id: Optional[int] = None
    sort_by: str = DEFAULT_SORT

    def cache_key(self, page: int) -> CacheKey:
        return CacheKey(
            self.sire_id,
            self.grand_sire_id,
            self.grand_dam_id,
            self.sort_by,
            page,
        )

    def params(self, page: int, limit: int, max_follower_num: int) -> Dict[str, Union[str, int]]:
        """Query-string parameters for ``page`` of this search."""

        return {
            "page": page,
            "limit": limit,
            "search_type": "inheritance",
            "main_parent_id": self.sire_id,
            "sort_by": self.sort_by,
            "sort_order": "desc",
            "max_follower_num": max_follower_num,
        }

    def describe(self) -> str:
        parts = [f"sire {self.sire_id}"]
        if self.grand_sire_id is not None:
            pair = str(self.grand_sire_id)
            if self.grand_dam_id is not None:
                pair += f" x {self.grand_dam_id}"
            parts.append(f"[{pair}]")
        return " ".join(parts)
