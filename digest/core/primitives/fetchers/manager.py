"""
Fetcher manager for orchestrating feed refreshes.

This module fans out all source fetchers concurrently, merges whatever
succeeded, and publishes one new snapshot per refresh cycle.
"""

import asyncio
import logging
import time
from typing import Any

from digest.core.config import get_sources_config
from digest.core.models import EmptyReason, FetchOutcome, Item, RefreshStats, Snapshot
from digest.core.primitives.fetchers.base import BaseFetcher, describe_error
from digest.core.primitives.fetchers.hackernews import HackerNewsTopFetcher, ShowHNFetcher
from digest.core.primitives.fetchers.hn_comments import HNCommentsFetcher
from digest.core.primitives.fetchers.hype import HypeFetcher
from digest.core.primitives.fetchers.producthunt import ProductHuntFetcher
from digest.core.primitives.fetchers.telegram import TelegramFetcher
from digest.core.storage import FeedStore
from digest.core.utils.time import utcnow

logger = logging.getLogger(__name__)

# Config key -> fetcher class. Order is the merge order of a refresh.
SOURCE_FETCHERS: dict[str, type[BaseFetcher]] = {
    "hackernews": HackerNewsTopFetcher,
    "showhn": ShowHNFetcher,
    "hn_comments": HNCommentsFetcher,
    "producthunt": ProductHuntFetcher,
    "telegram": TelegramFetcher,
    "hype": HypeFetcher,
}


def build_fetchers(sources_config: dict[str, Any] | None = None) -> list[BaseFetcher]:
    """
    Build the enabled fetchers from the `sources` config section.

    Sources missing from the config are enabled with defaults.

    Args:
        sources_config: Mapping of source key to its settings. When omitted,
            each source reads its own section from the loaded config.

    Returns:
        Fetchers in merge order.
    """
    fetchers: list[BaseFetcher] = []
    for key, fetcher_cls in SOURCE_FETCHERS.items():
        if sources_config is None:
            source_config = get_sources_config(key)
        else:
            source_config = sources_config.get(key) or {}
        if not source_config.get("enabled", True):
            logger.info(f"Source {key} disabled in config")
            continue
        fetchers.append(fetcher_cls.from_config(source_config))
    return fetchers


class FetcherManager:
    """
    Orchestrates one refresh cycle across all sources.

    Responsibilities:
    - Run every fetcher concurrently and wait for all of them to settle
    - Collect items from successful sources, one error per failed source
    - Drop duplicate item ids, sort by posted_at (newest first)
    - Build a snapshot and publish it to the FeedStore in one step
    """

    def __init__(self, store: FeedStore, fetchers: list[BaseFetcher] | None = None):
        """
        Initialize the manager.

        Args:
            store: Store that receives each new snapshot.
            fetchers: Fetchers to run, in merge order. Built from config if None.
        """
        self.store = store
        self.fetchers = fetchers if fetchers is not None else build_fetchers()
        self.last_stats: RefreshStats | None = None
        # Serializes overlapping refreshes (timer vs manual trigger).
        self._lock = asyncio.Lock()

    async def refresh(self) -> Snapshot:
        """
        Run one refresh cycle and publish the result.

        A cycle where every source fails still publishes an empty snapshot
        that carries all the errors.

        Returns:
            The published snapshot.
        """
        async with self._lock:
            return await self._refresh()

    async def _refresh(self) -> Snapshot:
        logger.info(f"Starting feed refresh across {len(self.fetchers)} sources...")
        started = time.monotonic()

        results = await asyncio.gather(
            *(fetcher.fetch() for fetcher in self.fetchers),
            return_exceptions=True,
        )

        stats = RefreshStats()
        merged: list[Item] = []

        for fetcher, result in zip(self.fetchers, results):
            outcome = self._settle(fetcher, result)

            if outcome.ok:
                stats.sources_ok += 1
                merged.extend(outcome.items)
                logger.info(f"  {outcome.source}: {len(outcome.items)} items ({outcome.elapsed_ms}ms)")
            else:
                stats.sources_failed += 1
                stats.errors.append(f"{outcome.source}: {outcome.error}")
                logger.error(f"  {outcome.source} failed: {outcome.error}")

            if outcome.empty_reason is not None:
                stats.empty_sources[outcome.source] = str(outcome.empty_reason)
                if outcome.empty_reason == EmptyReason.NO_MATCH:
                    logger.warning(f"  {outcome.source}: extraction matched nothing on the page")

        items = self._deduplicate(merged, stats)
        # Stable sort: ties keep fetcher order, then per-source order.
        items.sort(key=lambda item: item.posted_at, reverse=True)

        snapshot = Snapshot(
            items=tuple(items),
            last_updated=utcnow(),
            errors=tuple(stats.errors),
        )
        self.store.replace(snapshot)

        stats.items_total = len(items)
        stats.elapsed_ms = int((time.monotonic() - started) * 1000)
        self.last_stats = stats

        logger.info(
            f"Feed refresh complete: items={stats.items_total}, "
            f"sources_ok={stats.sources_ok}, sources_failed={stats.sources_failed}, "
            f"elapsed={stats.elapsed_ms}ms"
        )
        return snapshot

    def _settle(self, fetcher: BaseFetcher, result: FetchOutcome | BaseException) -> FetchOutcome:
        """Turn an unexpected exception from a fetcher into a failed outcome."""
        if isinstance(result, BaseException):
            if isinstance(result, asyncio.CancelledError):
                raise result
            return FetchOutcome(source=fetcher.name, tag=fetcher.tag, error=describe_error(result))
        return result

    def _deduplicate(self, items: list[Item], stats: RefreshStats) -> list[Item]:
        """Keep the first item for each id."""
        seen: set[str] = set()
        unique: list[Item] = []
        for item in items:
            if item.id in seen:
                logger.debug(f"Skipping duplicate item id: {item.id}")
                stats.duplicates_dropped += 1
                continue
            seen.add(item.id)
            unique.append(item)
        return unique
