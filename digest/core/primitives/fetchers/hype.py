"""
Hype fetcher.

The page has no API or feed, so entries are scraped with generic
selectors. Scraped entries carry no dates and are stamped with the
fetch time.
"""

import logging
from datetime import datetime
from typing import Any

from digest.core.models import SourceTag
from digest.core.primitives.extractors.scrape import entry_to_item, scrape_entries
from digest.core.primitives.fetcher import Fetcher
from digest.core.primitives.fetchers.base import (
    DEFAULT_MAX_ITEMS,
    BaseFetcher,
    Candidate,
)

logger = logging.getLogger(__name__)

PAGE_URL = "https://hype.replicate.dev/"
SCRAPE_TIMEOUT = 15.0

PAGE_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
}


class HypeFetcher(BaseFetcher):
    """Scrapes trending entries from the Hype page."""

    name = "Hype"
    tag = SourceTag.HYPE
    heuristic = True

    def __init__(
        self,
        page_url: str = PAGE_URL,
        timeout: float = SCRAPE_TIMEOUT,
        max_items: int = DEFAULT_MAX_ITEMS,
        fetcher: Fetcher | None = None,
    ):
        """
        Initialize the scrape fetcher.

        Args:
            page_url: Page to scrape.
            timeout: HTTP request timeout in seconds.
            max_items: Maximum number of distinct entries.
            fetcher: HTTP primitive to use.
        """
        super().__init__(timeout=timeout, max_items=max_items, fetcher=fetcher)
        self.page_url = page_url

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "HypeFetcher":
        return cls(
            page_url=config.get("page_url") or PAGE_URL,
            timeout=float(config.get("timeout", SCRAPE_TIMEOUT)),
        )

    async def _fetch_candidates(self, now: datetime) -> list[Candidate]:
        html = await self.fetcher.get_text(self.page_url, headers=PAGE_HEADERS)
        entries = scrape_entries(html, self.page_url, limit=self.max_items or DEFAULT_MAX_ITEMS)
        logger.info(f"{self.name}: scraped {len(entries)} entries from {self.page_url}")
        return [
            Candidate(item=entry_to_item(entry, index, now, self.tag))
            for index, entry in enumerate(entries)
        ]
