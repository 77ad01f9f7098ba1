"""Record types returned by the uma.moe search API."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


def _int_list(values: Any) -> List[int]:
    return [int(value) for value in values or []]


def _require_mapping(payload: Any, what: str) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise TypeError(f"{what} must be an object, got {type(payload).__name__}")
    return payload


@dataclass
class Lineage:
    """Inheritance data for one record; the parent pair is unordered."""

    parent_left_id: int
    parent_right_id: int
    inheritance_id: int = 0
    account_id: int = 0
    main_parent_id: int = 0
    parent_rank: int = 0
    parent_rarity: int = 0
    blue_sparks: List[int] = field(default_factory=list)
    pink_sparks: List[int] = field(default_factory=list)
    green_sparks: List[int] = field(default_factory=list)
    white_sparks: List[int] = field(default_factory=list)
    win_count: int = 0
    white_count: int = 0
    main_blue_factors: List[int] = field(default_factory=list)
    main_pink_factors: List[int] = field(default_factory=list)
    main_green_factors: List[int] = field(default_factory=list)
    main_white_factors: List[int] = field(default_factory=list)
    main_white_count: int = 0

    @property
    def sparks(self) -> List[int]:
        return self.blue_sparks + self.pink_sparks + self.green_sparks + self.white_sparks

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Lineage":
        _require_mapping(payload, "inheritance")
        return cls(
            parent_left_id=int(payload["parent_left_id"]),
            parent_right_id=int(payload["parent_right_id"]),
            inheritance_id=int(payload.get("inheritance_id") or 0),
            account_id=int(payload.get("account_id") or 0),
            main_parent_id=int(payload.get("main_parent_id") or 0),
            parent_rank=int(payload.get("parent_rank") or 0),
            parent_rarity=int(payload.get("parent_rarity") or 0),
            blue_sparks=_int_list(payload.get("blue_sparks")),
            pink_sparks=_int_list(payload.get("pink_sparks")),
            green_sparks=_int_list(payload.get("green_sparks")),
            white_sparks=_int_list(payload.get("white_sparks")),
            win_count=int(payload.get("win_count") or 0),
            white_count=int(payload.get("white_count") or 0),
            main_blue_factors=_int_list(payload.get("main_blue_factors")),
            main_pink_factors=_int_list(payload.get("main_pink_factors")),
            main_green_factors=_int_list(payload.get("main_green_factors")),
            main_white_factors=_int_list(payload.get("main_white_factors")),
            main_white_count=int(payload.get("main_white_count") or 0),
        )


@dataclass
class SupportCard:
    """Support card lent by the trainer alongside the inheritance record."""

    support_card_id: int
    account_id: int = 0
    limit_break_count: int = 0
    experience: int = 0

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "SupportCard":
        _require_mapping(payload, "support_card")
        return cls(
            support_card_id=int(payload["support_card_id"]),
            account_id=int(payload.get("account_id") or 0),
            limit_break_count=int(payload.get("limit_break_count") or 0),
            experience=int(payload.get("experience") or 0),
        )


@dataclass
class SearchResult:
    """One trainer account matched by an inheritance search."""

    account_id: str
    trainer_name: str = ""
    follower_num: int = 0
    inheritance: Optional[Lineage] = None
    support_card: Optional[SupportCard] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "SearchResult":
        """Build a result from an API item.

        Raises ``KeyError``/``TypeError``/``ValueError`` when the item lacks an
        account id or carries malformed nested data.
        """

        _require_mapping(payload, "item")
        inheritance = payload.get("inheritance")
        support_card = payload.get("support_card")
        return cls(
            account_id=str(payload["account_id"]),
            trainer_name=payload.get("trainer_name") or "",
            follower_num=int(payload.get("follower_num") or 0),
            inheritance=Lineage.from_payload(inheritance) if inheritance else None,
            support_card=SupportCard.from_payload(support_card) if support_card else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PageResult:
    """A single page of search results with the API's paging metadata."""

    items: List[SearchResult]
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def empty(cls, page: int) -> "PageResult":
        """Stand-in for a page that could not be fetched or parsed."""

        return cls(items=[], total=0, page=page, limit=0, total_pages=0)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any], page: int) -> "PageResult":
        raw_items = payload.get("items") or []
        if not isinstance(raw_items, list):
            raise TypeError(f"items must be a list, got {type(raw_items).__name__}")
        items = [SearchResult.from_payload(item) for item in raw_items]
        return cls(
            items=items,
            total=int(payload.get("total") or 0),
            page=int(payload.get("page") or page),
            limit=int(payload.get("limit") or 0),
            total_pages=int(payload.get("total_pages") or 0),
        )
