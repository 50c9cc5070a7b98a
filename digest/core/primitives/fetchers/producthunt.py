"""
Product Hunt RSS fetcher.

The public feed is more reliable than scraping the site. If the primary
feed errors or yields no entries, a secondary feed URL is tried.
"""

import logging
from datetime import datetime
from typing import Any

from digest.core.models import SourceTag
from digest.core.primitives.extractors.rss import parse_feed
from digest.core.primitives.fetcher import Fetcher
from digest.core.primitives.fetchers.base import (
    DEFAULT_MAX_ITEMS,
    DEFAULT_TIMEOUT,
    BaseFetcher,
    Candidate,
    describe_error,
)

logger = logging.getLogger(__name__)

FEED_URL = "https://www.producthunt.com/feed"
FALLBACK_FEED_URL = "https://www.producthunt.com/feed?category=undefined"
SITE_URL = "https://www.producthunt.com"

RSS_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; DigestBot/1.0)",
    "Accept": "application/rss+xml, application/xml, text/xml, */*",
}


class ProductHuntFetcher(BaseFetcher):
    """Fetches today's launches from the Product Hunt feed."""

    name = "ProductHunt"
    tag = SourceTag.PRODUCTHUNT
    heuristic = True

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        feed_url: str = FEED_URL,
        fallback_feed_url: str | None = FALLBACK_FEED_URL,
        max_items: int = DEFAULT_MAX_ITEMS,
        fetcher: Fetcher | None = None,
    ):
        """
        Initialize the feed fetcher.

        Args:
            timeout: HTTP request timeout in seconds.
            feed_url: Primary feed URL.
            fallback_feed_url: Secondary feed URL, None to disable fallback.
            max_items: Maximum entries taken from a feed.
            fetcher: HTTP primitive to use.
        """
        super().__init__(timeout=timeout, max_items=max_items, fetcher=fetcher)
        self.feed_url = feed_url
        self.fallback_feed_url = fallback_feed_url

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "ProductHuntFetcher":
        return cls(
            timeout=float(config.get("timeout", DEFAULT_TIMEOUT)),
            feed_url=config.get("feed_url") or FEED_URL,
            fallback_feed_url=config.get("fallback_feed_url", FALLBACK_FEED_URL),
        )

    async def _fetch_candidates(self, now: datetime) -> list[Candidate]:
        try:
            candidates = await self._fetch_feed(self.feed_url, now)
        except Exception as e:
            if not self.fallback_feed_url:
                raise
            logger.warning(f"{self.name}: primary feed failed ({describe_error(e)}), trying fallback")
            return await self._fetch_feed(self.fallback_feed_url, now)

        if not candidates and self.fallback_feed_url:
            logger.warning(f"{self.name}: primary feed empty, trying fallback")
            return await self._fetch_feed(self.fallback_feed_url, now)

        return candidates

    async def _fetch_feed(self, url: str, now: datetime) -> list[Candidate]:
        document = await self.fetcher.get_text(url, headers=RSS_HEADERS)
        items = parse_feed(
            document,
            tag=self.tag,
            id_prefix="ph",
            now=now,
            default_url=SITE_URL,
            limit=self.max_items or DEFAULT_MAX_ITEMS,
        )
        logger.info(f"{self.name}: {len(items)} entries from {url}")
        return [Candidate(item=item) for item in items]
