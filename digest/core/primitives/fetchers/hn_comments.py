"""
Hacker News best-comment fetcher.

Algolia's search API does not expose comment votes reliably, so comments
are ranked with a heuristic: substantive length (capped) plus points
when known.
"""

import logging
from datetime import datetime

from digest.core.models import SourceTag
from digest.core.primitives.exceptions import ParseError
from digest.core.primitives.extractors.hackernews import (
    MIN_COMMENT_LENGTH,
    CommentHit,
    comment_to_item,
)
from digest.core.primitives.fetchers.base import BaseFetcher, Candidate

logger = logging.getLogger(__name__)

ALGOLIA_SEARCH_BY_DATE = "https://hn.algolia.com/api/v1/search_by_date"
HITS_PER_PAGE = 100


class HNCommentsFetcher(BaseFetcher):
    """Fetches the best recent Hacker News comments."""

    name = "HN Comments"
    tag = SourceTag.HN_COMMENTS
    ranked = True

    async def _fetch_candidates(self, now: datetime) -> list[Candidate]:
        cutoff = int((now - self.window).timestamp())
        data = await self.fetcher.get_json(
            ALGOLIA_SEARCH_BY_DATE,
            params={
                "tags": "comment",
                "numericFilters": f"created_at_i>{cutoff}",
                "hitsPerPage": HITS_PER_PAGE,
            },
        )
        if not isinstance(data, dict) or not isinstance(data.get("hits"), list):
            raise ParseError("Algolia response has no hits list")

        candidates: list[Candidate] = []
        for raw in data["hits"]:
            hit = CommentHit.from_json(raw)
            if hit is None:
                logger.debug("Skipping malformed comment hit")
                continue
            if len(hit.text) <= MIN_COMMENT_LENGTH:
                continue
            candidates.append(Candidate(item=comment_to_item(hit), score=hit.score))

        logger.info(f"{self.name}: {len(candidates)} substantive comments of {len(data['hits'])}")
        return candidates
