"""
Hacker News ranked-story fetchers.

Top stories and Show HN share one algorithm:
1. Fetch the ranked id list
2. Fetch details for the first N ids concurrently
3. Keep stories inside the recency window
4. Rank by score and keep the top 10
"""

import asyncio
import logging
from datetime import datetime
from typing import Any

from digest.core.models import SourceTag
from digest.core.primitives.exceptions import ParseError
from digest.core.primitives.extractors.hackernews import HNStory, story_to_item
from digest.core.primitives.fetcher import Fetcher
from digest.core.primitives.fetchers.base import (
    DEFAULT_MAX_ITEMS,
    DEFAULT_TIMEOUT,
    BaseFetcher,
    Candidate,
)

logger = logging.getLogger(__name__)

HN_API = "https://hacker-news.firebaseio.com/v0"

DEFAULT_CANDIDATE_LIMIT = 50
DEFAULT_CONCURRENT_LIMIT = 10


class RankedStoryFetcher(BaseFetcher):
    """
    Fetches one ranked story list from the Hacker News Firebase API.

    Subclasses set the list endpoint and the item id prefix.
    """

    list_endpoint: str = ""
    id_prefix: str = ""
    ranked = True

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        candidate_limit: int = DEFAULT_CANDIDATE_LIMIT,
        concurrent_limit: int = DEFAULT_CONCURRENT_LIMIT,
        max_items: int = DEFAULT_MAX_ITEMS,
        fetcher: Fetcher | None = None,
    ):
        """
        Initialize the ranked-story fetcher.

        Args:
            timeout: HTTP request timeout in seconds.
            candidate_limit: How many ranked ids to fetch details for.
            concurrent_limit: Max concurrent detail requests.
            max_items: Number of top stories to keep.
            fetcher: HTTP primitive to use.
        """
        super().__init__(timeout=timeout, max_items=max_items, fetcher=fetcher)
        self.candidate_limit = candidate_limit
        self.concurrent_limit = concurrent_limit

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "RankedStoryFetcher":
        return cls(
            timeout=float(config.get("timeout", DEFAULT_TIMEOUT)),
            candidate_limit=int(config.get("candidate_limit", DEFAULT_CANDIDATE_LIMIT)),
            concurrent_limit=int(config.get("concurrent_limit", DEFAULT_CONCURRENT_LIMIT)),
        )

    async def _fetch_candidates(self, now: datetime) -> list[Candidate]:
        ids = await self.fetcher.get_json(f"{HN_API}/{self.list_endpoint}")
        if not isinstance(ids, list):
            raise ParseError(f"Expected a list of ids from {self.list_endpoint}")

        candidate_ids = ids[: self.candidate_limit]
        semaphore = asyncio.Semaphore(self.concurrent_limit)

        async def fetch_with_semaphore(story_id: Any) -> HNStory | None:
            async with semaphore:
                return await self._fetch_story(story_id)

        stories = await asyncio.gather(*(fetch_with_semaphore(i) for i in candidate_ids))

        candidates = [
            Candidate(item=story_to_item(story, self.tag, self.id_prefix), score=story.score)
            for story in stories
            if story is not None and story.type == "story" and story.title
        ]
        logger.info(
            f"{self.name}: {len(candidates)} stories from {len(candidate_ids)} ranked ids"
        )
        return candidates

    async def _fetch_story(self, story_id: Any) -> HNStory | None:
        """Fetch one story; failures skip the story instead of the source."""
        try:
            data = await self.fetcher.get_json(f"{HN_API}/item/{story_id}.json")
        except Exception as e:
            logger.warning(f"{self.name}: skipping story {story_id}: {e}")
            return None
        return HNStory.from_json(data)


class HackerNewsTopFetcher(RankedStoryFetcher):
    """Front-page top stories."""

    name = "HackerNews"
    tag = SourceTag.HACKERNEWS
    list_endpoint = "topstories.json"
    id_prefix = "hn"


class ShowHNFetcher(RankedStoryFetcher):
    """Show HN stories."""

    name = "Show HN"
    tag = SourceTag.SHOWHN
    list_endpoint = "showstories.json"
    id_prefix = "showhn"
