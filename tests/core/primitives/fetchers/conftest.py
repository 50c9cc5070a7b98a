"""
Test fixtures for fetcher tests.

Provides a stub fetcher whose candidates (or failure) are set by the test,
so the base class pipeline and FetcherManager can be exercised without
any HTTP.
"""

from datetime import datetime
from unittest.mock import MagicMock

import pytest

from digest.core.models import SourceTag
from digest.core.primitives.fetchers.base import BaseFetcher, Candidate


class StubFetcher(BaseFetcher):
    """Fetcher returning preset candidates or raising a preset error."""

    def __init__(
        self,
        name: str,
        tag: SourceTag,
        candidates: list[Candidate] | None = None,
        error: Exception | None = None,
        **kwargs,
    ):
        super().__init__(fetcher=MagicMock(), **kwargs)
        self.name = name
        self.tag = tag
        self.candidates = candidates or []
        self.error = error

    async def _fetch_candidates(self, now: datetime) -> list[Candidate]:
        if self.error is not None:
            raise self.error
        return list(self.candidates)


@pytest.fixture
def make_stub():
    """Factory for StubFetcher instances."""

    def _make(
        name: str = "Stub",
        tag: SourceTag = SourceTag.HACKERNEWS,
        items=(),
        scores=None,
        error: Exception | None = None,
        ranked: bool = False,
        heuristic: bool = False,
        max_items: int | None = 10,
    ) -> StubFetcher:
        scores = scores or [0.0] * len(items)
        stub = StubFetcher(
            name,
            tag,
            candidates=[Candidate(item=i, score=s) for i, s in zip(items, scores)],
            error=error,
            max_items=max_items,
        )
        stub.ranked = ranked
        stub.heuristic = heuristic
        return stub

    return _make
