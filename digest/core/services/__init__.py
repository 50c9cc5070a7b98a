"""Services module — read-side operations over the feed."""

from digest.core.services.feed_query import FeedPage, FeedQueryService

__all__ = [
    "FeedPage",
    "FeedQueryService",
]
