"""Time utilities for consistent timezone handling."""

from datetime import UTC, datetime, timedelta

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

# Upstream clocks may run slightly ahead of ours.
CLOCK_SKEW = timedelta(minutes=5)


def utcnow() -> datetime:
    """
    Get current UTC time as a timezone-aware datetime.

    All timestamps in the application (fetch time, posted_at, snapshot
    last_updated) are timezone-aware UTC so they compare safely.

    Returns:
        datetime: Current UTC time with timezone information.

    Example:
        >>> now = utcnow()
        >>> now.tzinfo == UTC
        True
    """
    return datetime.now(UTC)


def from_unix(timestamp: int | float) -> datetime:
    """Convert a Unix timestamp (seconds) to an aware UTC datetime."""
    return datetime.fromtimestamp(timestamp, UTC)


def ensure_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to aware UTC.

    Naive datetimes are assumed to already be UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def parse_iso(value: str | None) -> datetime | None:
    """
    Parse an ISO-8601 timestamp into aware UTC.

    Accepts the trailing "Z" form used by most JSON APIs.
    Returns None for empty or unparseable input.
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return ensure_utc(datetime.fromisoformat(text))
    except ValueError:
        return None


def within_window(posted_at: datetime, now: datetime, window: timedelta) -> bool:
    """True if posted_at lies inside the trailing window ending at now."""
    return now - window <= posted_at <= now + CLOCK_SKEW
