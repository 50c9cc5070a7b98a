"""Tests for the RSS/Atom extractor."""

from datetime import UTC, datetime

import pytest

from digest.core.models import SourceTag
from digest.core.primitives.exceptions import ParseError
from digest.core.primitives.extractors.rss import parse_feed

NOW = datetime(2024, 1, 2, 9, tzinfo=UTC)

RSS = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Product Hunt</title>
    <item>
      <title>Launchpad</title>
      <link>https://www.producthunt.com/posts/launchpad</link>
      <guid>launchpad-1</guid>
      <description>&lt;p&gt;Ship &lt;b&gt;faster&lt;/b&gt;&lt;/p&gt;</description>
      <pubDate>Mon, 01 Jan 2024 12:00:00 GMT</pubDate>
    </item>
    <item>
      <description>No title here</description>
    </item>
    <item>
      <title>Undated</title>
      <description>Nothing else</description>
    </item>
  </channel>
</rss>
"""

ATOM = """<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Example</title>
  <entry>
    <title>Atom entry</title>
    <link href="https://example.org/a"/>
    <id>urn:uuid:1</id>
    <updated>2024-01-01T08:00:00Z</updated>
    <summary>Atom summary</summary>
  </entry>
</feed>
"""


class TestParseFeed:
    """Tests for parse_feed."""

    def test_entries_in_document_order(self):
        """Test titled entries are kept in order and untitled ones skipped."""
        items = parse_feed(RSS, SourceTag.PRODUCTHUNT, "ph", NOW, default_url="https://ph.example")

        assert [item.title for item in items] == ["Launchpad", "Undated"]

    def test_entry_fields(self):
        """Test date, link, summary and metadata of a full entry."""
        item = parse_feed(RSS, SourceTag.PRODUCTHUNT, "ph", NOW)[0]

        assert item.url == "https://www.producthunt.com/posts/launchpad"
        assert item.posted_at == datetime(2024, 1, 1, 12, tzinfo=UTC)
        assert item.summary == "Ship faster"
        assert item.metadata.domain == "producthunt.com"
        assert item.id.startswith("ph-")
        assert len(item.id) == len("ph-") + 12

    def test_missing_date_and_link(self):
        """Test undated entries get the fetch time and the default link."""
        item = parse_feed(RSS, SourceTag.PRODUCTHUNT, "ph", NOW, default_url="https://ph.example")[1]

        assert item.posted_at == NOW
        assert item.url == "https://ph.example"

    def test_ids_are_stable(self):
        """Test the same document yields the same ids."""
        first = parse_feed(RSS, SourceTag.PRODUCTHUNT, "ph", NOW)
        second = parse_feed(RSS, SourceTag.PRODUCTHUNT, "ph", NOW)

        assert [i.id for i in first] == [i.id for i in second]

    def test_limit(self):
        """Test the limit caps the number of items."""
        assert len(parse_feed(RSS, SourceTag.PRODUCTHUNT, "ph", NOW, limit=1)) == 1

    def test_atom(self):
        """Test Atom feeds are parsed too."""
        items = parse_feed(ATOM, SourceTag.PRODUCTHUNT, "ph", NOW)

        assert len(items) == 1
        assert items[0].url == "https://example.org/a"
        assert items[0].posted_at == datetime(2024, 1, 1, 8, tzinfo=UTC)
        assert items[0].summary == "Atom summary"

    def test_not_a_feed(self):
        """Test a non-feed document raises ParseError."""
        with pytest.raises(ParseError):
            parse_feed("this is not a feed <<<", SourceTag.PRODUCTHUNT, "ph", NOW)
