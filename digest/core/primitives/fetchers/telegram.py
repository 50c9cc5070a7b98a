"""
Telegram channel fetcher.

Scrapes the public preview page of each configured channel concurrently.
A failing channel is logged and skipped; the source only fails when every
channel fails. Posts are time-windowed but not capped.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any

from digest.core.models import SourceTag
from digest.core.primitives.exceptions import UpstreamError
from digest.core.primitives.extractors.telegram import (
    PREVIEW_URL,
    ChannelMessage,
    message_to_item,
    parse_channel_page,
)
from digest.core.primitives.fetcher import Fetcher
from digest.core.primitives.fetchers.base import (
    DEFAULT_TIMEOUT,
    BaseFetcher,
    Candidate,
    describe_error,
)

logger = logging.getLogger(__name__)

DEFAULT_CHANNELS = [
    "data_secrets",
    "gonzo_ML",
    "seeallochnaya",
    "denissexy",
    "NeuralShit",
    "cryptoEssay",
    "sergiobulaev",
    "blognot",
    "addmeto",
]

DEFAULT_CONCURRENT_LIMIT = 5

PAGE_HEADERS = {"Accept": "text/html,application/xhtml+xml"}


class TelegramFetcher(BaseFetcher):
    """Fetches recent posts from public Telegram channels."""

    name = "Telegram"
    tag = SourceTag.TELEGRAM
    # Ranked by timestamp so channels interleave newest first.
    ranked = True
    heuristic = True

    def __init__(
        self,
        channels: list[str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        concurrent_limit: int = DEFAULT_CONCURRENT_LIMIT,
        fetcher: Fetcher | None = None,
    ):
        """
        Initialize the channel fetcher.

        Args:
            channels: Channel names (without '@').
            timeout: HTTP request timeout in seconds.
            concurrent_limit: Max concurrent channel page fetches.
            fetcher: HTTP primitive to use.
        """
        super().__init__(timeout=timeout, max_items=None, fetcher=fetcher)
        self.channels = [c.lstrip("@") for c in (channels or DEFAULT_CHANNELS)]
        self.concurrent_limit = concurrent_limit

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "TelegramFetcher":
        return cls(
            channels=config.get("channels") or DEFAULT_CHANNELS,
            timeout=float(config.get("timeout", DEFAULT_TIMEOUT)),
            concurrent_limit=int(config.get("concurrent_limit", DEFAULT_CONCURRENT_LIMIT)),
        )

    async def _fetch_candidates(self, now: datetime) -> list[Candidate]:
        semaphore = asyncio.Semaphore(self.concurrent_limit)

        async def fetch_with_semaphore(channel: str) -> list[ChannelMessage]:
            async with semaphore:
                return await self._fetch_channel(channel)

        results = await asyncio.gather(
            *(fetch_with_semaphore(c) for c in self.channels),
            return_exceptions=True,
        )

        messages: list[ChannelMessage] = []
        failures: list[str] = []
        for channel, result in zip(self.channels, results):
            if isinstance(result, BaseException):
                if isinstance(result, asyncio.CancelledError):
                    raise result
                logger.error(f"Error fetching Telegram channel @{channel}: {describe_error(result)}")
                failures.append(channel)
                continue
            messages.extend(result)

        if self.channels and len(failures) == len(self.channels):
            raise UpstreamError(f"all {len(failures)} channels failed")

        return [
            Candidate(item=message_to_item(m), score=m.posted_at.timestamp())
            for m in messages
        ]

    async def _fetch_channel(self, channel: str) -> list[ChannelMessage]:
        url = PREVIEW_URL.format(channel=channel)
        html = await self.fetcher.get_text(url, headers=PAGE_HEADERS)
        messages = parse_channel_page(html, channel)
        logger.debug(f"@{channel}: {len(messages)} messages on preview page")
        return messages
