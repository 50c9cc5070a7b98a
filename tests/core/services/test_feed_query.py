"""Tests for FeedQueryService."""

import pytest

from digest.core.models import Snapshot, SourceTag
from digest.core.services import FeedQueryService
from digest.core.storage import FeedStore
from digest.core.utils.time import utcnow


@pytest.fixture
def store(make_item) -> FeedStore:
    """Store holding one item per source."""
    snapshot = Snapshot(
        items=(
            make_item("hn-1", tag=SourceTag.HACKERNEWS),
            make_item("showhn-1", tag=SourceTag.SHOWHN),
            make_item("hn-comment-1", tag=SourceTag.HN_COMMENTS, url=None),
            make_item("ph-1", tag=SourceTag.PRODUCTHUNT),
            make_item("tg-chan-1", tag=SourceTag.TELEGRAM),
            make_item("hype-0-abc", tag=SourceTag.HYPE),
        ),
        last_updated=utcnow(),
        errors=("Telegram: all 9 channels failed",),
    )
    return FeedStore(snapshot)


class TestFeedQueryService:
    """Tests for FeedQueryService class."""

    def test_default_hides_auxiliary_sources(self, store):
        """Test the default feed excludes hype and comments."""
        page = FeedQueryService(store).read()

        assert [item.id for item in page.items] == ["hn-1", "showhn-1", "ph-1", "tg-chan-1"]
        assert page.total_count == 6
        assert page.filtered_count == 4
        assert page.errors == ("Telegram: all 9 channels failed",)

    def test_explicit_auxiliary_filter(self, store):
        """Test an auxiliary source is reachable by its tag."""
        page = FeedQueryService(store).read("hype")

        assert [item.id for item in page.items] == ["hype-0-abc"]
        assert page.filtered_count == 1
        assert page.total_count == 6

    def test_filter_by_source(self, store):
        """Test filtering a main source."""
        page = FeedQueryService(store).read("hn-comments")

        assert [item.id for item in page.items] == ["hn-comment-1"]

    def test_unknown_filter_falls_back_to_default(self, store):
        """Test an unknown source value behaves like no filter."""
        page = FeedQueryService(store).read("reddit")

        assert page.filtered_count == 4

    def test_empty_store(self):
        """Test reading before the first refresh."""
        page = FeedQueryService(FeedStore()).read()

        assert page.items == ()
        assert page.total_count == 0
        assert page.to_dict()["lastUpdated"] == "1970-01-01T00:00:00+00:00"

    def test_to_dict(self, store):
        """Test the wire shape of a page."""
        data = FeedQueryService(store).read("telegram").to_dict()

        assert set(data) == {"items", "lastUpdated", "totalCount", "filteredCount", "errors"}
        assert data["items"][0]["sourceTag"] == "telegram"
        assert data["items"][0]["metadata"] == {"channel": "@test"}
        assert data["errors"] == ["Telegram: all 9 channels failed"]
