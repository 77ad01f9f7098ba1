"""Incremental inheritance search driven one window at a time.

The session does not loop on its own. The caller steps it, inspects the
outcome, and then decides whether to advance to the next window, stop, or
reset with a new ancestor selection. The only states the session enters by
itself are the two exhausted ones, reached after a run of windows that
produced nothing new.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set

from ..ingest.models import SearchResult
from ..query_gen.search_query import SearchQuery
from ..retrieval.batch_search import BatchSearch


logger = logging.getLogger(__name__)

MAX_CONSECUTIVE_FAILS = 5
PAGE_STRIDE = 20


class SessionStatus(str, enum.Enum):
    READY = "ready"
    AWAITING_DECISION = "awaiting_decision"
    EXHAUSTED_EMPTY = "exhausted_empty"
    EXHAUSTED_STALLED = "exhausted_stalled"
    STOPPED = "stopped"


TERMINAL_STATUSES = frozenset(
    {SessionStatus.EXHAUSTED_EMPTY, SessionStatus.EXHAUSTED_STALLED, SessionStatus.STOPPED}
)


class SessionFinishedError(RuntimeError):
    """Raised when a finished session is stepped or advanced."""


@dataclass
class WindowOutcome:
    """What one window contributed, plus the session state after it."""

    new_items: List[SearchResult]
    accumulated: List[SearchResult]
    consecutive_fails: int
    status: SessionStatus
    first_page: int
    last_page: int

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES


@dataclass
class InheritanceSession:
    """Accumulates unique search results across successive windows."""

    search: BatchSearch
    query: SearchQuery
    max_consecutive_fails: int = MAX_CONSECUTIVE_FAILS
    page_stride: int = PAGE_STRIDE
    page_start: int = field(default=1, init=False)
    consecutive_fails: int = field(default=0, init=False)
    status: SessionStatus = field(default=SessionStatus.READY, init=False)
    _accumulated: List[SearchResult] = field(default_factory=list, init=False, repr=False)
    _seen: Set[str] = field(default_factory=set, init=False, repr=False)

    @property
    def accumulated(self) -> List[SearchResult]:
        return list(self._accumulated)

    @property
    def is_finished(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def step(self) -> WindowOutcome:
        """Fetch the current window and fold its new results into the session."""

        self._ensure_active("step")
        window = self.search.fetch_window_for(self.query, self.page_start)

        new_items: List[SearchResult] = []
        for item in window:
            if item.account_id in self._seen:
                continue
            self._seen.add(item.account_id)
            new_items.append(item)

        if new_items:
            self._accumulated.extend(new_items)
            self.consecutive_fails = 0
        else:
            self.consecutive_fails += 1

        if self.consecutive_fails >= self.max_consecutive_fails:
            self.status = (
                SessionStatus.EXHAUSTED_STALLED if self._accumulated else SessionStatus.EXHAUSTED_EMPTY
            )
            logger.info(
                "session.exhausted",
                extra={
                    "query": self.query.describe(),
                    "status": self.status.value,
                    "accumulated": len(self._accumulated),
                },
            )
        else:
            self.status = SessionStatus.AWAITING_DECISION

        logger.info(
            "session.window",
            extra={
                "query": self.query.describe(),
                "page_start": self.page_start,
                "new_items": len(new_items),
                "consecutive_fails": self.consecutive_fails,
            },
        )
        return WindowOutcome(
            new_items=new_items,
            accumulated=self.accumulated,
            consecutive_fails=self.consecutive_fails,
            status=self.status,
            first_page=self.page_start,
            last_page=self.page_start + self.page_stride - 1,
        )

    def advance(self) -> None:
        """Move on to the next window after the caller chose to continue."""

        self._ensure_active("advance")
        if self.status is not SessionStatus.AWAITING_DECISION:
            raise RuntimeError("advance() requires a completed window; call step() first")
        self.page_start += self.page_stride
        self.status = SessionStatus.READY

    def stop(self) -> List[SearchResult]:
        """End the session, keeping what has been accumulated so far."""

        if not self.is_finished:
            self.status = SessionStatus.STOPPED
        return self.accumulated

    def reset(self, query: Optional[SearchQuery] = None) -> None:
        """Discard all results and start over, optionally with a new query."""

        if query is not None:
            self.query = query
        self._accumulated.clear()
        self._seen.clear()
        self.page_start = 1
        self.consecutive_fails = 0
        self.status = SessionStatus.READY

    def _ensure_active(self, action: str) -> None:
        if self.is_finished:
            raise SessionFinishedError(f"cannot {action}() a session that is {self.status.value}")
