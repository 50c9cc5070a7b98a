"""Tests for time utilities."""

from datetime import UTC, datetime, timedelta, timezone

from digest.core.utils.time import (
    CLOCK_SKEW,
    ensure_utc,
    from_unix,
    parse_iso,
    utcnow,
    within_window,
)


class TestParseIso:
    """Tests for parse_iso."""

    def test_trailing_z(self):
        """Test the Z suffix is read as UTC."""
        assert parse_iso("2024-01-01T12:00:00Z") == datetime(2024, 1, 1, 12, tzinfo=UTC)

    def test_offset_is_normalized(self):
        """Test offsets are converted to UTC."""
        parsed = parse_iso("2024-01-01T15:00:00+03:00")
        assert parsed == datetime(2024, 1, 1, 12, tzinfo=UTC)
        assert parsed.tzinfo == UTC

    def test_invalid_returns_none(self):
        """Test garbage input yields None."""
        assert parse_iso("yesterday") is None
        assert parse_iso("") is None
        assert parse_iso(None) is None


class TestConversions:
    """Tests for timestamp conversions."""

    def test_utcnow_is_aware(self):
        """Test utcnow returns an aware UTC datetime."""
        assert utcnow().tzinfo == UTC

    def test_from_unix(self):
        """Test Unix seconds conversion."""
        assert from_unix(0) == datetime(1970, 1, 1, tzinfo=UTC)

    def test_ensure_utc_naive(self):
        """Test naive datetimes are assumed UTC."""
        assert ensure_utc(datetime(2024, 1, 1)) == datetime(2024, 1, 1, tzinfo=UTC)

    def test_ensure_utc_other_zone(self):
        """Test aware datetimes are converted."""
        value = datetime(2024, 1, 1, 2, tzinfo=timezone(timedelta(hours=2)))
        assert ensure_utc(value) == datetime(2024, 1, 1, tzinfo=UTC)


class TestWithinWindow:
    """Tests for within_window."""

    now = datetime(2024, 6, 1, 12, tzinfo=UTC)
    window = timedelta(hours=24)

    def test_recent_inside(self):
        """Test an hour-old timestamp is inside."""
        assert within_window(self.now - timedelta(hours=1), self.now, self.window)

    def test_boundary_inside(self):
        """Test exactly window-old is still inside."""
        assert within_window(self.now - self.window, self.now, self.window)

    def test_old_outside(self):
        """Test older than the window is outside."""
        assert not within_window(self.now - timedelta(hours=25), self.now, self.window)

    def test_small_future_skew_allowed(self):
        """Test timestamps slightly ahead of now are tolerated."""
        assert within_window(self.now + timedelta(minutes=1), self.now, self.window)

    def test_far_future_outside(self):
        """Test timestamps beyond the skew allowance are rejected."""
        future = self.now + CLOCK_SKEW + timedelta(seconds=1)
        assert not within_window(future, self.now, self.window)
