"""Shared fakes and payload builders for the test suite."""

from typing import Any, Dict, List, Optional

import pytest
import requests

from uma_inheritance.ingest.models import Lineage, PageResult, SearchResult


def make_item(account_id, left=1, right=2, sire=1001, **extra) -> Dict[str, Any]:
    """Build one API item as returned by the search endpoint."""
    item = {
        "account_id": account_id,
        "trainer_name": f"trainer-{account_id}",
        "follower_num": 10,
        "inheritance": {
            "inheritance_id": 1,
            "account_id": 0,
            "main_parent_id": sire,
            "parent_left_id": left,
            "parent_right_id": right,
            "parent_rank": 5,
            "parent_rarity": 3,
            "blue_sparks": [101],
            "pink_sparks": [201],
            "green_sparks": [],
            "white_sparks": [301, 302],
            "win_count": 12,
            "white_count": 2,
        },
        "support_card": {"account_id": 0, "support_card_id": 30001, "limit_break_count": 4, "experience": 100},
    }
    item.update(extra)
    return item


def make_result(account_id: str, left: int = 1, right: int = 2) -> SearchResult:
    return SearchResult(
        account_id=account_id,
        trainer_name=f"trainer-{account_id}",
        inheritance=Lineage(parent_left_id=left, parent_right_id=right),
    )


class FakeResponse:
    def __init__(self, status_code=200, payload=None, json_error: Optional[Exception] = None, headers=None):
        self.status_code = status_code
        self.ok = 200 <= status_code < 400
        self.reason = "OK" if self.ok else "Error"
        self.url = "https://uma.moe/api/v3/search"
        self.headers = headers or {}
        self._payload = payload
        self._json_error = json_error

    def json(self):
        if self._json_error is not None:
            raise self._json_error
        return self._payload


class FakeSession:
    """Stands in for ``requests.Session``; replays queued responses or errors."""

    def __init__(self, responses: Optional[List[Any]] = None):
        self.headers: Dict[str, str] = {}
        self.responses = list(responses or [])
        self.calls: List[Dict[str, Any]] = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        outcome = self.responses.pop(0) if self.responses else FakeResponse(payload={"items": []})
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeClient:
    """Page source keyed by page number; counts every call."""

    def __init__(self, pages: Optional[Dict[int, List[SearchResult]]] = None, fail_pages=()):
        self.pages = pages or {}
        self.fail_pages = set(fail_pages)
        self.calls: List[tuple] = []

    def fetch_page(self, page, sire_id, sort_by="parent_rank"):
        self.calls.append((page, sire_id, sort_by))
        if page in self.fail_pages:
            raise RuntimeError(f"page {page} exploded")
        items = self.pages.get(page, [])
        return PageResult(items=list(items), total=len(items), page=page, limit=12, total_pages=1)


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def connection_error():
    return requests.ConnectionError("connection refused")
