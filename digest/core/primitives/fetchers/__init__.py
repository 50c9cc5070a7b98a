"""
Source fetchers for the digest feed.

This module provides one fetcher per upstream integration:
- HackerNewsTopFetcher / ShowHNFetcher: ranked stories (Firebase API)
- HNCommentsFetcher: best recent comments (Algolia API)
- ProductHuntFetcher: launches (RSS with fallback feed)
- TelegramFetcher: public channel posts (preview page scraping)
- HypeFetcher: trending entries (best-effort page scraping)
- FetcherManager: orchestrates a refresh across all of them
"""

from digest.core.primitives.fetchers.base import BaseFetcher, Candidate
from digest.core.primitives.fetchers.hackernews import HackerNewsTopFetcher, ShowHNFetcher
from digest.core.primitives.fetchers.hn_comments import HNCommentsFetcher
from digest.core.primitives.fetchers.hype import HypeFetcher
from digest.core.primitives.fetchers.manager import FetcherManager, build_fetchers
from digest.core.primitives.fetchers.producthunt import ProductHuntFetcher
from digest.core.primitives.fetchers.telegram import TelegramFetcher

__all__ = [
    "BaseFetcher",
    "Candidate",
    "FetcherManager",
    "HackerNewsTopFetcher",
    "HNCommentsFetcher",
    "HypeFetcher",
    "ProductHuntFetcher",
    "ShowHNFetcher",
    "TelegramFetcher",
    "build_fetchers",
]
