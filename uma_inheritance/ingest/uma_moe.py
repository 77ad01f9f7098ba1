"""Client for the uma.moe inheritance search API."""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

from .. import __version__
from ..query_gen.search_query import DEFAULT_SORT, SearchQuery
from .models import PageResult


logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://uma.moe/api/v3/search"
DEFAULT_USER_AGENT = f"uma-inheritance/{__version__}"
PAGE_SIZE = 12
MAX_FOLLOWER_NUM = 1000


@dataclass
class UmaMoeClient:
    """Fetches single result pages from the uma.moe search endpoint.

    Every failure mode (connection errors, non-2xx statuses, malformed bodies)
    is absorbed here and reported as an empty page, so one bad page never
    aborts a larger search. Rate-limit responses and network errors are
    retried a few times before giving up.
    """

    base_url: str = field(default_factory=lambda: os.getenv("UMA_MOE_API_URL", DEFAULT_API_URL))
    page_size: int = PAGE_SIZE
    max_follower_num: int = MAX_FOLLOWER_NUM
    request_timeout: float = 30
    retry_attempts: int = 2
    backoff_seconds: float = 0.5
    session: requests.Session = field(default_factory=requests.Session)

    def __post_init__(self) -> None:
        self.session.headers.update(
            {
                "Accept": "application/json",
                "User-Agent": os.getenv("UMA_MOE_USER_AGENT", DEFAULT_USER_AGENT),
            }
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def fetch_page(self, page: int, sire_id: int, sort_by: str = DEFAULT_SORT) -> PageResult:
        """Fetch one page of inheritance records for ``sire_id``.

        Returns:
            The parsed page, or ``PageResult.empty(page)`` if the request or
            the response body could not be used.
        """

        params = SearchQuery(sire_id, sort_by=sort_by).params(
            page, limit=self.page_size, max_follower_num=self.max_follower_num
        )
        payload = self._request_with_retry(params)
        if payload is None:
            return PageResult.empty(page)

        try:
            return PageResult.from_payload(payload, page)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            logger.warning(
                "uma_moe.response.parse_error",
                extra={"page": page, "sire_id": sire_id, "error": str(exc)},
            )
            return PageResult.empty(page)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _request_with_retry(self, params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        attempts = max(1, self.retry_attempts)
        for attempt in range(1, attempts + 1):
            try:
                response = self.session.get(self.base_url, params=params, timeout=self.request_timeout)
                logger.info(
                    "uma_moe.request",
                    extra={
                        "url": response.url,
                        "status_code": response.status_code,
                        "attempt": attempt,
                    },
                )
                if response.status_code == 429 and attempt < attempts:
                    retry_after = response.headers.get("Retry-After")
                    try:
                        sleep_for = float(retry_after) if retry_after else self.backoff_seconds * attempt
                    except ValueError:
                        sleep_for = self.backoff_seconds * attempt
                    time.sleep(sleep_for)
                    continue
                if not response.ok:
                    logger.warning(
                        "uma_moe.request.failed",
                        extra={
                            "params": params,
                            "status_code": response.status_code,
                            "reason": response.reason,
                        },
                    )
                    return None
            except requests.RequestException as exc:
                if attempt >= attempts:
                    logger.warning(
                        "uma_moe.request.failed",
                        extra={"params": params, "error": str(exc)},
                    )
                    return None
                sleep_for = self.backoff_seconds * attempt
                logger.info(
                    "uma_moe.request.retry",
                    extra={
                        "params": params,
                        "error": str(exc),
                        "attempt": attempt,
                        "sleep_for": sleep_for,
                    },
                )
                time.sleep(sleep_for)
                continue

            try:
                data = response.json()
            except ValueError as exc:
                logger.warning(
                    "uma_moe.response.parse_error",
                    extra={"params": params, "error": str(exc)},
                )
                return None

            if not isinstance(data, dict):
                logger.warning(
                    "uma_moe.response.parse_error",
                    extra={"params": params, "error": f"unexpected body type {type(data).__name__}"},
                )
                return None
            return data

        return None
