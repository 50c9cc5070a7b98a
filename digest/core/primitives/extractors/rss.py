"""
RSS/Atom extractor.

Parses a feed document with feedparser and normalizes entries in
document order.
"""

import hashlib
import logging
from calendar import timegm
from datetime import datetime

import feedparser

from digest.core.models import Item, LinkMetadata, SourceTag
from digest.core.primitives.exceptions import ParseError
from digest.core.primitives.extractors.text import derive_summary, extract_domain
from digest.core.utils.time import from_unix

logger = logging.getLogger(__name__)


def _entry_text(entry: feedparser.FeedParserDict) -> str:
    """Description of an entry: summary/description, else first content block."""
    text = entry.get("summary") or entry.get("description") or ""
    if not text and entry.get("content"):
        text = entry["content"][0].get("value", "")
    return text


def _entry_time(entry: feedparser.FeedParserDict) -> datetime | None:
    """Publication time as aware UTC, or None if absent or unparseable."""
    parsed = entry.get("published_parsed") or entry.get("updated_parsed")
    if not parsed:
        return None
    try:
        return from_unix(timegm(parsed))
    except (TypeError, ValueError, OverflowError):
        return None


def _entry_id(id_prefix: str, entry: feedparser.FeedParserDict, title: str) -> str:
    key = entry.get("id") or entry.get("link") or title
    digest = hashlib.sha1(key.encode("utf-8")).hexdigest()[:12]
    return f"{id_prefix}-{digest}"


def parse_feed(
    document: str,
    tag: SourceTag,
    id_prefix: str,
    now: datetime,
    default_url: str | None = None,
    limit: int = 10,
) -> list[Item]:
    """
    Parse feed entries into items, in document order.

    Entries without a title are skipped. Entries without a usable date are
    stamped with the fetch time.

    Args:
        document: Raw RSS/Atom XML.
        tag: Source tag for the produced items.
        id_prefix: Namespace prefix for item ids.
        now: Fetch time.
        default_url: URL used for entries without a link.
        limit: Maximum number of items.

    Raises:
        ParseError: If the document is not a feed at all.
    """
    feed = feedparser.parse(document)
    # A bozo flag with a detected version is still a usable feed.
    if feed.bozo and not feed.entries and not feed.get("version"):
        raise ParseError(f"Unparseable feed: {feed.get('bozo_exception')}")

    items: list[Item] = []
    for entry in feed.entries:
        if len(items) >= limit:
            break

        title = (entry.get("title") or "").strip()
        if not title:
            logger.debug("Skipping feed entry without title")
            continue

        url = (entry.get("link") or "").strip() or default_url
        items.append(
            Item(
                id=_entry_id(id_prefix, entry, title),
                title=title,
                summary=derive_summary(_entry_text(entry), fallback=title),
                url=url,
                source_tag=tag,
                posted_at=_entry_time(entry) or now,
                metadata=LinkMetadata(domain=extract_domain(url)),
            )
        )

    return items
