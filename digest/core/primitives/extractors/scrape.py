"""
Best-effort HTML scrape extractor for pages with no API.

Tries generic structural selectors in order until enough distinct,
plausibly titled entries are found. If nothing matches, falls back to
scanning every hyperlink on the page.
"""

import hashlib
import logging
from dataclasses import dataclass
from datetime import datetime
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Tag

from digest.core.models import Item, LinkMetadata, SourceTag
from digest.core.primitives.extractors.text import (
    collapse_whitespace,
    extract_domain,
    make_absolute,
    truncate_summary,
)

logger = logging.getLogger(__name__)

STRUCTURAL_SELECTORS = [
    "article",
    "[class*='post']",
    "[class*='article']",
    "[class*='item']",
    "[class*='card']",
    "a[href*='http']",
]

TITLE_SELECTOR = "h1, h2, h3, h4, [class*='title']"
SUMMARY_SELECTOR = "p, [class*='desc'], [class*='summary']"

MIN_TITLE_LENGTH = 5
MAX_TITLE_LENGTH = 200
# Stop trying further selectors once this many entries are found.
ENOUGH_ENTRIES = 5

# Fallback link scan bounds on anchor text length (exclusive).
LINK_TEXT_MIN = 20
LINK_TEXT_MAX = 300

EXCLUDED_DOMAINS = (
    "twitter.com",
    "x.com",
    "github.com",
    "gitlab.com",
    "linkedin.com",
    "facebook.com",
    "discord.gg",
    "discord.com",
)
EXCLUDED_SCHEMES = ("mailto:", "javascript:", "tel:")
LINKABLE_SCHEMES = ("http", "https")


@dataclass(frozen=True)
class ScrapedEntry:
    """One entry found on a scraped page."""

    title: str
    url: str
    summary: str = ""


def _is_excluded_link(href: str) -> bool:
    if href.lower().startswith(EXCLUDED_SCHEMES):
        return True
    domain = extract_domain(href)
    if not domain:
        return False
    return any(domain == d or domain.endswith("." + d) for d in EXCLUDED_DOMAINS)


def _entry_url(href: str, page_url: str) -> str:
    """Absolute http(s) URL for an entry; any other scheme falls back to the page."""
    url = make_absolute(href.strip(), page_url)
    if not url:
        return page_url
    try:
        scheme = urlparse(url).scheme.lower()
    except ValueError:
        return page_url
    return url if scheme in LINKABLE_SCHEMES else page_url


def _entry_from_element(element: Tag, page_url: str) -> ScrapedEntry | None:
    """Title, link and description from one structural element."""
    title_el = element.select_one(TITLE_SELECTOR)
    if title_el is not None:
        title = collapse_whitespace(title_el.get_text(" "))
    elif element.name == "a":
        title = collapse_whitespace(element.get_text(" "))
    else:
        return None

    if len(title) <= MIN_TITLE_LENGTH:
        return None

    if element.name == "a":
        href = element.get("href", "")
    else:
        link_el = element.select_one("a[href]")
        href = link_el.get("href", "") if link_el is not None else ""

    summary_el = element.select_one(SUMMARY_SELECTOR)
    summary = collapse_whitespace(summary_el.get_text(" ")) if summary_el is not None else ""

    return ScrapedEntry(
        title=title[:MAX_TITLE_LENGTH],
        url=_entry_url(href, page_url),
        summary=summary,
    )


def _scan_structural(soup: BeautifulSoup, page_url: str, limit: int) -> list[ScrapedEntry]:
    entries: list[ScrapedEntry] = []
    titles: set[str] = set()

    for selector in STRUCTURAL_SELECTORS:
        for element in soup.select(selector):
            if len(entries) >= limit:
                break
            entry = _entry_from_element(element, page_url)
            if entry is None or entry.title in titles:
                continue
            titles.add(entry.title)
            entries.append(entry)

        logger.debug(f"Selector {selector!r}: {len(entries)} entries so far")
        if len(entries) >= ENOUGH_ENTRIES:
            break

    return entries


def _scan_links(soup: BeautifulSoup, page_url: str, limit: int) -> list[ScrapedEntry]:
    entries: list[ScrapedEntry] = []
    titles: set[str] = set()

    for anchor in soup.find_all("a"):
        if len(entries) >= limit:
            break

        href = anchor.get("href", "") or ""
        text = collapse_whitespace(anchor.get_text(" "))
        if not LINK_TEXT_MIN < len(text) < LINK_TEXT_MAX:
            continue
        if _is_excluded_link(href) or text in titles:
            continue

        titles.add(text)
        entries.append(
            ScrapedEntry(
                title=text[:MAX_TITLE_LENGTH],
                url=_entry_url(href, page_url),
                summary=text,
            )
        )

    return entries


def scrape_entries(html: str, page_url: str, limit: int = 10) -> list[ScrapedEntry]:
    """
    Extract up to `limit` distinct entries from a page.

    Args:
        html: Page HTML.
        page_url: URL of the page, for resolving relative links.
        limit: Maximum number of entries.

    Returns:
        Entries in page order, empty if nothing plausible was found.
    """
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup.find_all(["script", "style", "noscript"]):
        tag.decompose()

    entries = _scan_structural(soup, page_url, limit)
    if entries:
        return entries[:limit]

    logger.info(f"No structural entries on {page_url}, falling back to link scan")
    return _scan_links(soup, page_url, limit)


def entry_to_item(entry: ScrapedEntry, index: int, now: datetime, tag: SourceTag) -> Item:
    """
    Normalize a scraped entry into a feed item.

    Scraped pages carry no dates, so posted_at is the fetch time.
    """
    digest = hashlib.sha1(entry.title.encode("utf-8")).hexdigest()[:10]
    return Item(
        id=f"{tag}-{index}-{digest}",
        title=entry.title,
        summary=truncate_summary(entry.summary) or entry.title,
        url=entry.url,
        source_tag=tag,
        posted_at=now,
        metadata=LinkMetadata(domain=extract_domain(entry.url)),
    )
