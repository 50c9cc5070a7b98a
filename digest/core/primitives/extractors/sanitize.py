"""
Rich-text sanitizer for markup retained for display.

Scripts are removed with their content. Event-handler attributes are
dropped. Elements outside the allow-list are downgraded to a neutral
<span> so their content is kept; nothing a reader could see is lost.
"""

from bs4 import BeautifulSoup

ALLOWED_TAGS = frozenset(
    {
        "p",
        "br",
        "b",
        "strong",
        "i",
        "em",
        "u",
        "s",
        "a",
        "code",
        "pre",
        "blockquote",
        "ul",
        "ol",
        "li",
        "div",
        "span",
    }
)

NEUTRAL_TAG = "span"

# Removed together with everything inside them.
DROPPED_TAGS = ["script", "style"]

SAFE_URL_SCHEMES = ("http://", "https://")


def sanitize_rich_text(html: str | None) -> str:
    """
    Sanitize an HTML fragment.

    Args:
        html: Untrusted HTML fragment.

    Returns:
        Sanitized HTML fragment, or "" for empty input.
    """
    if not html:
        return ""

    soup = BeautifulSoup(html, "html.parser")

    for tag in soup.find_all(DROPPED_TAGS):
        tag.decompose()

    for tag in soup.find_all(True):
        if tag.name not in ALLOWED_TAGS:
            tag.name = NEUTRAL_TAG

        for attr in list(tag.attrs):
            value = tag.attrs[attr]
            if attr.lower().startswith("on"):
                del tag.attrs[attr]
            elif isinstance(value, str) and value.strip().lower().startswith("javascript:"):
                del tag.attrs[attr]

        if tag.name == "a":
            href = tag.get("href", "")
            tag.attrs = {}
            if isinstance(href, str) and href.startswith(SAFE_URL_SCHEMES):
                tag["href"] = href
                tag["target"] = "_blank"
                tag["rel"] = "noopener"

    return str(soup).strip()
