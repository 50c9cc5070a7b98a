"""
Shared test fixtures.

Provides item factories and a mocked HTTP primitive so fetchers can be
tested without network access.
"""

from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from digest.core.models import (
    ChannelMetadata,
    CommentMetadata,
    Item,
    LinkMetadata,
    SourceTag,
    StoryMetadata,
)
from digest.core.primitives.fetcher import Fetcher
from digest.core.utils.time import utcnow


def default_metadata(tag: SourceTag):
    """Smallest valid metadata variant for a tag."""
    if tag in (SourceTag.HACKERNEWS, SourceTag.SHOWHN):
        return StoryMetadata(upvotes=10, comments=2, author="pg", domain="example.com")
    if tag == SourceTag.HN_COMMENTS:
        return CommentMetadata(author="dang", parent_story="A story")
    if tag == SourceTag.TELEGRAM:
        return ChannelMetadata(channel="@test")
    return LinkMetadata(domain="example.com")


@pytest.fixture
def make_item():
    """Factory for feed items posted `age` before now."""

    def _make(
        item_id: str = "hn-1",
        tag: SourceTag = SourceTag.HACKERNEWS,
        age: timedelta = timedelta(hours=1),
        title: str = "Test item",
        posted_at: datetime | None = None,
        url: str | None = "https://example.com/post",
    ) -> Item:
        return Item(
            id=item_id,
            title=title,
            summary=f"Summary of {title}",
            url=url,
            source_tag=tag,
            posted_at=posted_at or utcnow() - age,
            metadata=default_metadata(tag),
        )

    return _make


@pytest.fixture
def http() -> MagicMock:
    """HTTP primitive with mocked get_json/get_text."""
    fetcher = MagicMock(spec=Fetcher)
    fetcher.get_json = AsyncMock()
    fetcher.get_text = AsyncMock()
    return fetcher
