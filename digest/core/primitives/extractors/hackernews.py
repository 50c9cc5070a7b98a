"""
Hacker News extractors.

Stories come from the Firebase item API, comments from the Algolia
search API. Both payloads are JSON; a malformed entry yields None so the
caller can skip it without failing the whole source.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from digest.core.models import CommentMetadata, Item, SourceTag, StoryMetadata
from digest.core.primitives.extractors.text import (
    derive_summary,
    extract_domain,
    strip_markup,
    truncate_summary,
)
from digest.core.utils.time import from_unix, parse_iso

logger = logging.getLogger(__name__)

HN_ITEM_URL = "https://news.ycombinator.com/item?id={id}"

MIN_COMMENT_LENGTH = 100
# Comment text length contributes at most this many points to the score.
MAX_LENGTH_POINTS = 10
CHARS_PER_POINT = 50


def _optional_str(value: Any) -> str | None:
    """Non-empty string fields only; anything else counts as missing."""
    return value if isinstance(value, str) and value else None


@dataclass(frozen=True)
class HNStory:
    """A story as returned by the Firebase item endpoint."""

    id: int
    type: str
    title: str
    score: int
    time: datetime
    by: str | None = None
    url: str | None = None
    text: str | None = None
    descendants: int | None = None

    @classmethod
    def from_json(cls, data: Any) -> "HNStory | None":
        """Build a story from raw JSON, or None if required fields are missing."""
        if not isinstance(data, dict):
            return None
        descendants = data.get("descendants")
        try:
            return cls(
                id=int(data["id"]),
                type=str(data.get("type", "")),
                title=str(data.get("title") or ""),
                score=int(data.get("score") or 0),
                time=from_unix(int(data["time"])),
                by=_optional_str(data.get("by")),
                url=_optional_str(data.get("url")),
                text=_optional_str(data.get("text")),
                descendants=descendants if isinstance(descendants, int) else None,
            )
        except (KeyError, TypeError, ValueError, OverflowError, OSError):
            logger.debug(f"Skipping malformed story payload: {data!r:.200}")
            return None


def story_to_item(story: HNStory, tag: SourceTag, id_prefix: str) -> Item:
    """Normalize a story into a feed item."""
    return Item(
        id=f"{id_prefix}-{story.id}",
        title=story.title,
        summary=derive_summary(story.text, fallback=story.title),
        url=story.url,
        source_tag=tag,
        posted_at=story.time,
        metadata=StoryMetadata(
            upvotes=story.score,
            comments=story.descendants or 0,
            author=story.by,
            domain=extract_domain(story.url),
        ),
    )


@dataclass(frozen=True)
class CommentHit:
    """A comment hit from the Algolia search_by_date endpoint."""

    object_id: str
    text: str
    created_at: datetime
    author: str | None = None
    points: int | None = None
    story_title: str | None = None

    @property
    def score(self) -> float:
        """Heuristic quality score: capped length points plus engagement."""
        length_points = min(len(self.text) / CHARS_PER_POINT, MAX_LENGTH_POINTS)
        return length_points + (self.points or 0)

    @classmethod
    def from_json(cls, data: Any) -> "CommentHit | None":
        """Build a hit from raw JSON, or None if it is unusable."""
        if not isinstance(data, dict):
            return None

        object_id = data.get("objectID")
        text = data.get("comment_text")
        if not object_id or not isinstance(text, str):
            return None

        created_at = parse_iso(data.get("created_at"))
        if created_at is None and data.get("created_at_i") is not None:
            try:
                created_at = from_unix(int(data["created_at_i"]))
            except (TypeError, ValueError, OverflowError, OSError):
                created_at = None
        if created_at is None:
            return None

        points = data.get("points")
        return cls(
            object_id=str(object_id),
            text=text,
            created_at=created_at,
            author=_optional_str(data.get("author")),
            points=points if isinstance(points, int) else None,
            story_title=_optional_str(data.get("story_title")),
        )


def comment_to_item(hit: CommentHit) -> Item:
    """Normalize a comment hit into a feed item."""
    return Item(
        id=f"hn-comment-{hit.object_id}",
        title=f"Re: {hit.story_title or 'HN Discussion'}",
        summary=truncate_summary(strip_markup(hit.text)),
        url=HN_ITEM_URL.format(id=hit.object_id),
        source_tag=SourceTag.HN_COMMENTS,
        posted_at=hit.created_at,
        metadata=CommentMetadata(
            author=hit.author,
            parent_story=hit.story_title,
            upvotes=hit.points or None,
        ),
    )
