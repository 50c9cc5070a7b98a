"""
Extractors — turn raw upstream payloads into normalized feed items.

- text: shared heuristics (domains, summaries, titles, shorthand counts)
- sanitize: rich-text sanitizer for retained markup
- hackernews: Firebase stories and Algolia comment hits (JSON)
- rss: RSS/Atom feeds (XML)
- telegram: channel preview pages (HTML)
- scrape: generic best-effort page scraping (HTML)
"""

from digest.core.primitives.extractors.sanitize import sanitize_rich_text
from digest.core.primitives.extractors.text import (
    derive_summary,
    derive_title,
    extract_domain,
    parse_shorthand_count,
    strip_markup,
    truncate_summary,
)

__all__ = [
    "derive_summary",
    "derive_title",
    "extract_domain",
    "parse_shorthand_count",
    "sanitize_rich_text",
    "strip_markup",
    "truncate_summary",
]
