"""Feed models: items, metadata variants, snapshots and fetch outcomes."""

from digest.core.models.feed import (
    AUXILIARY_TAGS,
    ChannelMetadata,
    CommentMetadata,
    EmptyReason,
    FetchOutcome,
    Item,
    LinkMetadata,
    Metadata,
    RefreshStats,
    Snapshot,
    SourceTag,
    StoryMetadata,
)

__all__ = [
    "AUXILIARY_TAGS",
    "ChannelMetadata",
    "CommentMetadata",
    "EmptyReason",
    "FetchOutcome",
    "Item",
    "LinkMetadata",
    "Metadata",
    "RefreshStats",
    "Snapshot",
    "SourceTag",
    "StoryMetadata",
]
