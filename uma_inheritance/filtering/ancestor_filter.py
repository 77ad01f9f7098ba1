"""Grandparent matching for inheritance search results.

The API only filters on the primary ancestor (the sire). Narrowing by the
grandsire and granddam happens client-side: a record's parent pair is
unordered, so ``(A, B)`` and ``(B, A)`` describe the same lineage.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from ..ingest.models import SearchResult


def matches(
    result: SearchResult,
    grand_sire_id: Optional[int] = None,
    grand_dam_id: Optional[int] = None,
) -> bool:
    """Return whether ``result`` satisfies the requested grandparent filter.

    - No lineage data never matches.
    - With both ids, the parent pair must equal ``{grand_sire_id, grand_dam_id}``.
    - With only ``grand_sire_id``, it must occupy either parent slot.
    - With neither, every record with lineage matches.
    """

    lineage = result.inheritance
    if lineage is None:
        return False

    left, right = lineage.parent_left_id, lineage.parent_right_id

    # Exact pair has to be checked before the single-id rule.
    if grand_sire_id is not None and grand_dam_id is not None:
        return (left == grand_sire_id and right == grand_dam_id) or (
            left == grand_dam_id and right == grand_sire_id
        )

    if grand_sire_id is not None:
        return grand_sire_id in (left, right)

    return True


def filter_results(
    results: Iterable[SearchResult],
    grand_sire_id: Optional[int] = None,
    grand_dam_id: Optional[int] = None,
) -> List[SearchResult]:
    """Keep the matching results, preserving their order."""

    return [result for result in results if matches(result, grand_sire_id, grand_dam_id)]
