"""Tests for HypeFetcher."""

import pytest

from digest.core.models import EmptyReason, SourceTag
from digest.core.primitives.exceptions import UpstreamError
from digest.core.primitives.fetchers.hype import PAGE_URL, HypeFetcher

PAGE = """
<html><body>
  <div class="card"><h3>Flux Pro: fast image generation</h3>
    <a href="https://replicate.com/flux">Run</a><p>State of the art images</p></div>
  <div class="card"><h3>Whisper large v3 turbo</h3>
    <a href="/whisper">Run</a></div>
</body></html>
"""


class TestHypeFetcher:
    """Tests for HypeFetcher class."""

    @pytest.fixture
    def fetcher(self, http):
        """Create a fetcher with the mocked HTTP primitive."""
        return HypeFetcher(fetcher=http)

    def test_init_default_config(self):
        """Test scraping uses a longer timeout."""
        fetcher = HypeFetcher()

        assert fetcher.page_url == PAGE_URL
        assert fetcher.fetcher.config.timeout == 15.0

    async def test_scraped_entries(self, fetcher, http):
        """Test scraped entries are stamped with the fetch time."""
        http.get_text.return_value = PAGE

        outcome = await fetcher.fetch()

        assert outcome.ok
        assert [item.title for item in outcome.items] == [
            "Flux Pro: fast image generation",
            "Whisper large v3 turbo",
        ]
        first = outcome.items[0]
        assert first.source_tag == SourceTag.HYPE
        assert first.url == "https://replicate.com/flux"
        assert first.summary == "State of the art images"
        assert outcome.items[1].url == "https://hype.replicate.dev/whisper"

    async def test_nothing_recognized(self, fetcher, http):
        """Test a page that matches no selector reports no-match."""
        http.get_text.return_value = "<html><body><p>Loading...</p></body></html>"

        outcome = await fetcher.fetch()

        assert outcome.ok
        assert outcome.items == ()
        assert outcome.empty_reason == EmptyReason.NO_MATCH

    async def test_page_unreachable(self, fetcher, http):
        """Test a failed download fails the source."""
        http.get_text.side_effect = UpstreamError("Request to hype timed out after 1 attempt(s)")

        outcome = await fetcher.fetch()

        assert outcome.error == "Request to hype timed out after 1 attempt(s)"
