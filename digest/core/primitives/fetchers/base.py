"""
Base fetcher interface and common data structures.

All source fetchers inherit from BaseFetcher. Subclasses only produce
candidates; the base class applies the recency window, ranking and the
per-cycle cap, and converts every failure into a FetchOutcome error.
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from digest.core.models import EmptyReason, FetchOutcome, Item, SourceTag
from digest.core.primitives.fetcher import Fetcher, FetcherConfig
from digest.core.utils.time import utcnow, within_window

logger = logging.getLogger(__name__)

RECENCY_WINDOW = timedelta(hours=24)
DEFAULT_MAX_ITEMS = 10
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class Candidate:
    """
    An extracted item waiting for window filtering and ranking.

    score is only used by fetchers that rank (higher first).
    """

    item: Item
    score: float = 0.0

    def __repr__(self) -> str:
        return f"<Candidate(id='{self.item.id}', score={self.score})>"


def describe_error(error: BaseException) -> str:
    """One-line failure reason for an exception."""
    message = str(error).strip()
    return message or type(error).__name__


class BaseFetcher(ABC):
    """
    Abstract base class for source fetchers.

    Each fetcher owns one upstream integration and returns a FetchOutcome.
    fetch() never raises: network, timeout and parse failures become the
    outcome's error with no items.

    Class attributes:
        name: Human-readable source name used in error strings and logs.
        tag: Source tag of every item the fetcher produces.
        ranked: Sort candidates by score (descending) before capping.
        heuristic: Extraction is best-effort; report "no-match" when
            nothing was recognized.
    """

    name: str = ""
    tag: SourceTag
    ranked: bool = False
    heuristic: bool = False

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        max_items: int | None = DEFAULT_MAX_ITEMS,
        fetcher: Fetcher | None = None,
    ):
        """
        Initialize the fetcher.

        Args:
            timeout: HTTP request timeout in seconds.
            max_items: Per-cycle item cap, None for unbounded.
            fetcher: HTTP primitive to use (injected in tests).
        """
        self.fetcher = fetcher or Fetcher(FetcherConfig(timeout=timeout))
        self.max_items = max_items
        self.window = RECENCY_WINDOW

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "BaseFetcher":
        """Build the fetcher from its `sources.<name>` config section."""
        return cls(timeout=float(config.get("timeout", DEFAULT_TIMEOUT)))

    async def fetch(self) -> FetchOutcome:
        """Fetch, filter and rank items from this source."""
        now = utcnow()
        started = time.monotonic()

        try:
            candidates = await self._fetch_candidates(now)
        except Exception as e:
            elapsed_ms = int((time.monotonic() - started) * 1000)
            logger.error(f"{self.name} failed after {elapsed_ms}ms: {describe_error(e)}")
            return FetchOutcome(
                source=self.name,
                tag=self.tag,
                error=describe_error(e),
                elapsed_ms=elapsed_ms,
            )

        recent = [c for c in candidates if within_window(c.item.posted_at, now, self.window)]
        if len(recent) < len(candidates):
            logger.debug(f"{self.name}: {len(candidates) - len(recent)} candidates outside window")

        if self.ranked:
            recent.sort(key=lambda c: c.score, reverse=True)

        if self.max_items is not None:
            recent = recent[: self.max_items]

        empty_reason = None
        if not candidates and self.heuristic:
            empty_reason = EmptyReason.NO_MATCH
        elif candidates and not recent:
            empty_reason = EmptyReason.NO_RECENT

        return FetchOutcome(
            source=self.name,
            tag=self.tag,
            items=tuple(c.item for c in recent),
            empty_reason=empty_reason,
            elapsed_ms=int((time.monotonic() - started) * 1000),
        )

    @abstractmethod
    async def _fetch_candidates(self, now: datetime) -> list[Candidate]:
        """
        Fetch and extract candidate items.

        Args:
            now: Fetch time; the recency window ends here.

        Returns:
            Candidates in upstream order. May include items outside the
            window; the base class filters them.

        Raises:
            Exception: Any failure; converted to the outcome's error.
        """
        pass
