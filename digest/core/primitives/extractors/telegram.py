"""
Telegram channel preview extractor.

Public channels have an HTML preview at https://t.me/s/<channel> made of
repeated .tgme_widget_message blocks. There is no API contract, so every
field is best-effort: a block missing its text or timestamp is skipped.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime

from bs4 import BeautifulSoup, Tag

from digest.core.models import ChannelMetadata, Item, SourceTag
from digest.core.primitives.extractors.sanitize import sanitize_rich_text
from digest.core.primitives.extractors.text import (
    collapse_whitespace,
    derive_title,
    parse_shorthand_count,
    truncate_summary,
)
from digest.core.utils.time import parse_iso

logger = logging.getLogger(__name__)

PREVIEW_URL = "https://t.me/s/{channel}"
MESSAGE_URL = "https://t.me/{channel}/{message_id}"

MESSAGE_SELECTOR = ".tgme_widget_message"
TEXT_SELECTOR = ".tgme_widget_message_text"
VIEWS_SELECTOR = ".tgme_widget_message_views"

_BACKGROUND_URL_RE = re.compile(r"background-image\s*:\s*url\(\s*['\"]?([^'\")]+)['\"]?\s*\)")
_DECORATIVE_MARKERS = ("avatar", "icon", "emoji", "user_photo")


@dataclass(frozen=True)
class ChannelMessage:
    """One message parsed from a channel preview page."""

    channel: str
    message_id: str
    text: str
    posted_at: datetime
    rich_text: str = ""
    images: tuple[str, ...] = ()
    views: int | None = None

    @property
    def url(self) -> str:
        return MESSAGE_URL.format(channel=self.channel, message_id=self.message_id)


def _plain_text(element: Tag) -> str:
    """Text of an element with <br> turned into newlines."""
    fragment = BeautifulSoup(element.decode_contents(), "html.parser")
    for br in fragment.find_all("br"):
        br.replace_with("\n")
    return fragment.get_text().strip()


def _is_decorative(element: Tag, url: str) -> bool:
    """True for avatar, icon and emoji images."""
    haystack = [url.lower()]
    for node in (element, element.parent):
        if isinstance(node, Tag):
            haystack.extend(cls.lower() for cls in node.get("class", []))
    return any(marker in value for value in haystack for marker in _DECORATIVE_MARKERS)


def _normalize_image_url(url: str) -> str:
    url = url.strip()
    if url.startswith("//"):
        return "https:" + url
    return url


def _extract_images(block: Tag) -> tuple[str, ...]:
    """Image URLs from inline background styles and <img> tags, in order."""
    found: list[str] = []

    for element in block.find_all(style=True):
        for match in _BACKGROUND_URL_RE.finditer(element["style"]):
            url = _normalize_image_url(match.group(1))
            if not _is_decorative(element, url):
                found.append(url)

    for img in block.find_all("img", src=True):
        url = _normalize_image_url(img["src"])
        if not _is_decorative(img, url):
            found.append(url)

    seen: set[str] = set()
    images = []
    for url in found:
        if url.startswith(("http://", "https://")) and url not in seen:
            seen.add(url)
            images.append(url)
    return tuple(images)


def _message_id(block: Tag, index: int) -> str:
    data_post = block.get("data-post", "")
    if isinstance(data_post, str) and "/" in data_post:
        return data_post.rsplit("/", 1)[1]
    return str(index)


def parse_channel_page(html: str, channel: str) -> list[ChannelMessage]:
    """
    Parse all messages on a channel preview page.

    Args:
        html: Preview page HTML.
        channel: Channel name without '@'.

    Returns:
        Messages in page order; blocks without text or timestamp are skipped.
    """
    soup = BeautifulSoup(html, "html.parser")
    messages: list[ChannelMessage] = []

    for index, block in enumerate(soup.select(MESSAGE_SELECTOR)):
        text_el = block.select_one(TEXT_SELECTOR)
        time_el = block.select_one("time[datetime]")
        if text_el is None or time_el is None:
            continue

        text = _plain_text(text_el)
        posted_at = parse_iso(time_el.get("datetime"))
        if not text or posted_at is None:
            logger.debug(f"Skipping message {index} in @{channel}: no text or timestamp")
            continue

        views_el = block.select_one(VIEWS_SELECTOR)
        messages.append(
            ChannelMessage(
                channel=channel,
                message_id=_message_id(block, index),
                text=text,
                posted_at=posted_at,
                rich_text=sanitize_rich_text(text_el.decode_contents()),
                images=_extract_images(block),
                views=parse_shorthand_count(views_el.get_text()) if views_el else None,
            )
        )

    return messages


def message_to_item(message: ChannelMessage) -> Item:
    """Normalize a channel message into a feed item."""
    summary = truncate_summary(message.text)
    full_text = collapse_whitespace(message.text)
    return Item(
        id=f"tg-{message.channel}-{message.message_id}",
        title=derive_title(message.text),
        summary=summary,
        url=message.url,
        source_tag=SourceTag.TELEGRAM,
        posted_at=message.posted_at,
        metadata=ChannelMetadata(
            channel=f"@{message.channel}",
            views=message.views,
            images=message.images,
            full_text=message.text if len(full_text) > len(summary) else None,
            rich_text=message.rich_text or None,
        ),
    )
