"""
In-memory feed store.

Holds exactly one current snapshot. Snapshots are immutable, so
replacing the reference is the whole publication step: a reader that
called current() keeps a complete snapshot no matter what is published
afterwards.
"""

import logging

from digest.core.models import Snapshot

logger = logging.getLogger(__name__)


class FeedStore:
    """
    Single-snapshot store.

    Usage:
        store = FeedStore()
        store.replace(snapshot)

        snapshot = store.current()
    """

    def __init__(self, initial: Snapshot | None = None):
        """Initialize with an empty snapshot unless one is given."""
        self._snapshot = initial or Snapshot()

    def current(self) -> Snapshot:
        """Return the latest published snapshot. Never blocks."""
        return self._snapshot

    def replace(self, snapshot: Snapshot) -> None:
        """Publish a new snapshot, discarding the previous one."""
        if not isinstance(snapshot, Snapshot):
            raise TypeError(f"Expected Snapshot, got {type(snapshot).__name__}")
        self._snapshot = snapshot
        logger.debug(
            f"Published snapshot: {len(snapshot.items)} items, "
            f"{len(snapshot.errors)} errors, updated {snapshot.last_updated.isoformat()}"
        )
