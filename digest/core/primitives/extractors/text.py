"""
Text heuristics shared by all extractors.

Domain extraction, markup stripping, title/summary derivation and
shorthand count parsing. All functions are pure and never raise on
malformed input; they return None or an empty string instead.
"""

import re
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

SUMMARY_LIMIT = 280
# Prefer a word boundary only when it falls in the tail of the budget.
BOUNDARY_WINDOW = 80
SENTENCE_TITLE_LIMIT = 150
LINE_TITLE_LIMIT = 100
# Shorter "sentences" are list markers or abbreviations such as "1." or "Mr.".
MIN_SENTENCE_TITLE_LENGTH = 10
ELLIPSIS = "..."

_SENTENCE_RE = re.compile(r"^(.*?[.!?])(?=\s|$)")
_SHORTHAND_RE = re.compile(r"(\d+(?:\.\d+)?)([km]?)")
_MULTIPLIERS = {"": 1, "k": 1_000, "m": 1_000_000}


def collapse_whitespace(text: str | None) -> str:
    """Collapse runs of whitespace (including newlines) to single spaces."""
    if not text:
        return ""
    return " ".join(text.split())


def strip_markup(text: str | None) -> str:
    """Remove HTML tags and entities, then collapse whitespace."""
    if not text:
        return ""
    if "<" not in text and "&" not in text:
        return collapse_whitespace(text)
    soup = BeautifulSoup(text, "html.parser")
    return collapse_whitespace(soup.get_text(" "))


def truncate_summary(text: str | None, limit: int = SUMMARY_LIMIT) -> str:
    """
    Tweet-style truncation.

    Whitespace is collapsed first. Text within the limit is returned as is.
    Longer text is cut at the last space if that space lies within the last
    BOUNDARY_WINDOW characters of the budget, otherwise hard-cut. Either way
    an ellipsis is appended and the result never exceeds the limit.
    """
    cleaned = collapse_whitespace(text)
    if len(cleaned) <= limit:
        return cleaned

    cut = cleaned[: limit - len(ELLIPSIS)]
    last_space = cut.rfind(" ")
    if last_space > limit - BOUNDARY_WINDOW:
        cut = cut[:last_space]

    return cut.rstrip() + ELLIPSIS


def derive_summary(text: str | None, fallback: str = "") -> str:
    """Strip markup and truncate; use fallback when nothing is left."""
    summary = truncate_summary(strip_markup(text))
    return summary or truncate_summary(fallback)


def _truncate_words(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    cut = text[: limit - len(ELLIPSIS)]
    last_space = cut.rfind(" ")
    if last_space > limit // 2:
        cut = cut[:last_space]
    return cut.rstrip(" ,;:-") + ELLIPSIS


def derive_title(text: str | None) -> str:
    """
    Derive a title from free-form message text.

    Uses the first sentence of the first line (ending in '.', '!' or '?')
    capped at 150 characters when it is longer than ten characters, else
    the whole first line capped at 100.
    """
    if not text:
        return ""

    first_line = ""
    for line in text.strip().splitlines():
        if line.strip():
            first_line = collapse_whitespace(line)
            break

    match = _SENTENCE_RE.match(first_line)
    if match and len(match.group(1)) > MIN_SENTENCE_TITLE_LENGTH:
        return _truncate_words(match.group(1), SENTENCE_TITLE_LIMIT)

    return _truncate_words(first_line, LINE_TITLE_LIMIT)


def extract_domain(url: str | None) -> str | None:
    """Hostname without a leading 'www.', or None if it cannot be parsed."""
    if not url or not isinstance(url, str):
        return None
    try:
        hostname = urlparse(url).hostname
    except (ValueError, AttributeError, TypeError):
        return None
    if not hostname:
        return None
    return hostname.removeprefix("www.")


def make_absolute(url: str | None, base_url: str) -> str | None:
    """Resolve a possibly relative URL against the page it came from."""
    if not url:
        return None
    if url.startswith(("http://", "https://")):
        return url
    try:
        return urljoin(base_url, url)
    except ValueError:
        return None


def parse_shorthand_count(text: str | None) -> int | None:
    """
    Parse counts like '1.2k', '3M' or '450'.

    Case- and whitespace-insensitive. Unparseable input yields None,
    never zero.
    """
    if not text:
        return None
    cleaned = re.sub(r"\s+", "", text).lower()
    match = _SHORTHAND_RE.fullmatch(cleaned)
    if not match:
        return None

    number, suffix = match.groups()
    if not suffix and "." in number:
        return None
    return round(float(number) * _MULTIPLIERS[suffix])
