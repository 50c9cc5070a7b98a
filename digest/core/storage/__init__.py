"""Storage — the in-memory store for the current feed snapshot."""

from digest.core.storage.feed_store import FeedStore

__all__ = ["FeedStore"]
