"""
Service for reading the feed.

Answers read requests against the current snapshot with optional
source filtering.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from digest.core.models import AUXILIARY_TAGS, Item, SourceTag
from digest.core.storage import FeedStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeedPage:
    """One read of the feed."""

    items: tuple[Item, ...]
    last_updated: datetime
    total_count: int
    filtered_count: int
    errors: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire shape."""
        return {
            "items": [item.to_dict() for item in self.items],
            "lastUpdated": self.last_updated.isoformat(),
            "totalCount": self.total_count,
            "filteredCount": self.filtered_count,
            "errors": list(self.errors),
        }


class FeedQueryService:
    """
    Read-side service over a FeedStore.

    An explicit, valid source filter returns only that source's items.
    Without one (or with an unknown value), auxiliary sources are hidden.
    """

    def __init__(self, store: FeedStore):
        self.store = store

    def read(self, source_filter: str | None = None) -> FeedPage:
        """
        Read the current feed.

        Args:
            source_filter: Wire value of a source tag, or None.

        Returns:
            Page with the selected items and snapshot counts.
        """
        snapshot = self.store.current()
        tag = SourceTag.parse(source_filter)

        if source_filter and tag is None:
            logger.debug(f"Ignoring unknown source filter: {source_filter!r}")

        if tag is not None:
            items = tuple(item for item in snapshot.items if item.source_tag == tag)
        else:
            items = tuple(item for item in snapshot.items if item.source_tag not in AUXILIARY_TAGS)

        return FeedPage(
            items=items,
            last_updated=snapshot.last_updated,
            total_count=len(snapshot.items),
            filtered_count=len(items),
            errors=snapshot.errors,
        )
