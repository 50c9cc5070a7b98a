"""Tests for HNCommentsFetcher."""

from datetime import timedelta

import pytest

from digest.core.models import SourceTag
from digest.core.primitives.fetchers.hn_comments import ALGOLIA_SEARCH_BY_DATE, HNCommentsFetcher
from digest.core.utils.time import utcnow


def _hit(object_id: str, length: int, points=None, age: timedelta = timedelta(hours=1)) -> dict:
    return {
        "objectID": object_id,
        "comment_text": "x" * length,
        "created_at": (utcnow() - age).isoformat(),
        "author": "someone",
        "points": points,
        "story_title": "A story",
    }


class TestHNCommentsFetcher:
    """Tests for HNCommentsFetcher class."""

    @pytest.fixture
    def fetcher(self, http):
        """Create a fetcher with the mocked HTTP primitive."""
        return HNCommentsFetcher(fetcher=http)

    async def test_query_parameters(self, fetcher, http):
        """Test the search asks for recent comments only."""
        http.get_json.return_value = {"hits": []}

        await fetcher.fetch()

        url = http.get_json.call_args.args[0]
        params = http.get_json.call_args.kwargs["params"]
        assert url == ALGOLIA_SEARCH_BY_DATE
        assert params["tags"] == "comment"
        assert params["numericFilters"].startswith("created_at_i>")
        assert params["hitsPerPage"] == 100

    async def test_ranks_substantive_comments(self, fetcher, http):
        """Test short comments are dropped and the rest ranked by score."""
        http.get_json.return_value = {
            "hits": [
                _hit("short", length=100),
                _hit("medium", length=200),
                _hit("long", length=600),
                _hit("voted", length=150, points=20),
                {"objectID": "broken"},
            ]
        }

        outcome = await fetcher.fetch()

        assert outcome.ok
        assert [item.id for item in outcome.items] == [
            "hn-comment-voted",
            "hn-comment-long",
            "hn-comment-medium",
        ]
        assert outcome.items[0].source_tag == SourceTag.HN_COMMENTS

    async def test_old_comments_dropped(self, fetcher, http):
        """Test comments outside the window are excluded."""
        http.get_json.return_value = {"hits": [_hit("old", length=300, age=timedelta(hours=30))]}

        outcome = await fetcher.fetch()

        assert outcome.items == ()

    async def test_missing_hits(self, fetcher, http):
        """Test a response without hits fails the source."""
        http.get_json.return_value = {"message": "rate limited"}

        outcome = await fetcher.fetch()

        assert outcome.error == "Algolia response has no hits list"
