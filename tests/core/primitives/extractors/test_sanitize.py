"""Tests for the rich-text sanitizer."""

from digest.core.primitives.extractors.sanitize import sanitize_rich_text


class TestSanitizeRichText:
    """Tests for sanitize_rich_text."""

    def test_script_removed_with_content(self):
        """Test scripts are dropped entirely."""
        assert sanitize_rich_text("<script>alert(1)</script><p>ok</p>") == "<p>ok</p>"

    def test_style_removed_with_content(self):
        """Test style blocks are dropped entirely."""
        assert sanitize_rich_text("<style>p{color:red}</style>text") == "text"

    def test_event_handlers_removed(self):
        """Test on* attributes are stripped."""
        assert sanitize_rich_text('<b onclick="steal()">bold</b>') == "<b>bold</b>"

    def test_javascript_link_neutralized(self):
        """Test javascript: hrefs are removed."""
        result = sanitize_rich_text('<a href="javascript:alert(1)">click</a>')

        assert "javascript" not in result
        assert "click" in result

    def test_safe_link_opens_in_new_tab(self):
        """Test http(s) links keep href and gain target/rel."""
        result = sanitize_rich_text('<a href="https://example.com" class="x">link</a>')

        assert 'href="https://example.com"' in result
        assert 'target="_blank"' in result
        assert 'rel="noopener"' in result
        assert "class" not in result

    def test_unknown_tag_downgraded(self):
        """Test elements outside the allow-list become spans, keeping content."""
        assert sanitize_rich_text("<h1>Title</h1>") == "<span>Title</span>"
        assert sanitize_rich_text("<custom>text</custom>") == "<span>text</span>"

    def test_image_handler_removed(self):
        """Test an img with an error handler keeps no executable attribute."""
        result = sanitize_rich_text('<img src="x" onerror="alert(1)">')

        assert "onerror" not in result
        assert "<img" not in result

    def test_allowed_markup_kept(self):
        """Test allowed formatting survives."""
        html = "<p>Hello <strong>bold</strong><br/><code>x = 1</code></p>"
        result = sanitize_rich_text(html)

        assert "<strong>bold</strong>" in result
        assert "<code>x = 1</code>" in result
        assert "<br/>" in result

    def test_empty(self):
        """Test empty input."""
        assert sanitize_rich_text("") == ""
        assert sanitize_rich_text(None) == ""
