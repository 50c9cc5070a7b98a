"""
Feed data model.

Items, their source-specific metadata variants, and the snapshot that
groups them into one consistent feed state. Everything here is immutable:
a refresh builds new objects instead of mutating published ones.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any

from digest.core.utils.time import EPOCH


class SourceTag(StrEnum):
    """Closed set of upstream integrations. Values are wire-stable."""

    HACKERNEWS = "hackernews"
    SHOWHN = "showhn"
    PRODUCTHUNT = "producthunt"
    TELEGRAM = "telegram"
    HYPE = "hype"
    HN_COMMENTS = "hn-comments"

    @property
    def label(self) -> str:
        """Display string for the tag."""
        return SOURCE_LABELS[self]

    @classmethod
    def parse(cls, value: str | None) -> "SourceTag | None":
        """Return the tag for a wire value, or None if it is not in the set."""
        if not value:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


SOURCE_LABELS: dict[SourceTag, str] = {
    SourceTag.HACKERNEWS: "Hacker News",
    SourceTag.SHOWHN: "Show HN",
    SourceTag.PRODUCTHUNT: "Product Hunt",
    SourceTag.TELEGRAM: "Telegram",
    SourceTag.HYPE: "Hype",
    SourceTag.HN_COMMENTS: "HN Comment",
}

# Tags hidden from the default feed; reachable only via an explicit filter.
AUXILIARY_TAGS: frozenset[SourceTag] = frozenset({SourceTag.HYPE, SourceTag.HN_COMMENTS})


def _sparse(values: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is None so absence means 'not applicable'."""
    return {k: v for k, v in values.items() if v is not None}


@dataclass(frozen=True)
class StoryMetadata:
    """Metadata for ranked discussion-site stories."""

    upvotes: int | None = None
    comments: int | None = None
    author: str | None = None
    domain: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _sparse(
            {
                "upvotes": self.upvotes,
                "comments": self.comments,
                "author": self.author,
                "domain": self.domain,
            }
        )


@dataclass(frozen=True)
class CommentMetadata:
    """Metadata for discussion comments."""

    author: str | None = None
    parent_story: str | None = None
    upvotes: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return _sparse(
            {
                "author": self.author,
                "parentStory": self.parent_story,
                "upvotes": self.upvotes,
            }
        )


@dataclass(frozen=True)
class LinkMetadata:
    """Metadata for plain link sources (RSS entries, scraped links)."""

    domain: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _sparse({"domain": self.domain})


@dataclass(frozen=True)
class ChannelMetadata:
    """Metadata for messaging-channel posts."""

    channel: str
    views: int | None = None
    images: tuple[str, ...] = ()
    full_text: str | None = None
    rich_text: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _sparse(
            {
                "channel": self.channel,
                "views": self.views,
                "images": list(self.images) or None,
                "fullText": self.full_text,
                "richText": self.rich_text,
            }
        )


Metadata = StoryMetadata | CommentMetadata | LinkMetadata | ChannelMetadata

METADATA_TYPES: dict[SourceTag, type] = {
    SourceTag.HACKERNEWS: StoryMetadata,
    SourceTag.SHOWHN: StoryMetadata,
    SourceTag.HN_COMMENTS: CommentMetadata,
    SourceTag.PRODUCTHUNT: LinkMetadata,
    SourceTag.HYPE: LinkMetadata,
    SourceTag.TELEGRAM: ChannelMetadata,
}


@dataclass(frozen=True)
class Item:
    """
    One piece of content surfaced in the feed.

    The metadata variant must match the source tag; a mismatch is a
    programming error and raises ValueError at construction.
    """

    id: str
    title: str
    summary: str
    source_tag: SourceTag
    posted_at: datetime
    metadata: Metadata
    url: str | None = None

    def __post_init__(self) -> None:
        expected = METADATA_TYPES[self.source_tag]
        if not isinstance(self.metadata, expected):
            raise ValueError(
                f"{type(self.metadata).__name__} is not valid for source "
                f"'{self.source_tag}' (expected {expected.__name__})"
            )

    @property
    def source_label(self) -> str:
        return self.source_tag.label

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire shape."""
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "summary": self.summary,
            "sourceTag": str(self.source_tag),
            "sourceLabel": self.source_label,
            "postedAt": self.posted_at.isoformat(),
            "metadata": self.metadata.to_dict(),
        }
        if self.url:
            data["url"] = self.url
        return data

    def __repr__(self) -> str:
        title_preview = self.title[:50] + "..." if len(self.title) > 50 else self.title
        return f"<Item(id='{self.id}', title='{title_preview}')>"


@dataclass(frozen=True)
class Snapshot:
    """One consistent feed state, published atomically."""

    items: tuple[Item, ...] = ()
    last_updated: datetime = EPOCH
    errors: tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.items)


class EmptyReason(StrEnum):
    """Why a source that did not fail still produced no items."""

    NO_MATCH = "no-match"
    NO_RECENT = "no-recent"


@dataclass(frozen=True)
class FetchOutcome:
    """
    Result of one source fetch.

    Either items (possibly empty) with error=None, or an error reason with
    no items. empty_reason distinguishes "heuristics matched nothing" from
    "reachable but nothing recent".
    """

    source: str
    tag: SourceTag
    items: tuple[Item, ...] = ()
    error: str | None = None
    empty_reason: EmptyReason | None = None
    elapsed_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class RefreshStats:
    """Statistics from one refresh cycle."""

    sources_ok: int = 0
    sources_failed: int = 0
    items_total: int = 0
    duplicates_dropped: int = 0
    elapsed_ms: int = 0
    empty_sources: dict[str, str] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
