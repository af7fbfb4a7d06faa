"""Tests for display helpers."""

from datetime import UTC, datetime, timedelta

import pytest

from postboard.services.formatting import time_ago

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=UTC)


class TestTimeAgo:
    """Tests for time_ago."""

    def test_just_now(self):
        assert time_ago(NOW, now=NOW) == "Just now"

    def test_under_a_minute(self):
        assert time_ago(NOW - timedelta(seconds=59), now=NOW) == "Just now"

    def test_minutes_are_floored(self):
        assert time_ago(NOW - timedelta(seconds=90), now=NOW) == "1min ago"
        assert time_ago(NOW - timedelta(minutes=59, seconds=59), now=NOW) == "59min ago"

    def test_hours(self):
        assert time_ago(NOW - timedelta(hours=2), now=NOW) == "2hrs ago"
        assert time_ago(NOW - timedelta(hours=23, minutes=59), now=NOW) == "23hrs ago"

    def test_days(self):
        assert time_ago(NOW - timedelta(days=3), now=NOW) == "3day(s) ago"
        assert time_ago(NOW - timedelta(days=1), now=NOW) == "1day(s) ago"

    @pytest.mark.parametrize(
        "elapsed, expected",
        [
            (timedelta(days=2, hours=5), "2day(s) ago"),
            (timedelta(hours=1, minutes=30), "1hrs ago"),
            (timedelta(minutes=5, seconds=10), "5min ago"),
        ],
    )
    def test_largest_unit_wins(self, elapsed, expected):
        assert time_ago(NOW - elapsed, now=NOW) == expected

    def test_naive_timestamps_are_utc(self):
        """Naive values (as read back from SQLite) are treated as UTC."""
        naive = (NOW - timedelta(hours=2)).replace(tzinfo=None)
        assert time_ago(naive, now=NOW) == "2hrs ago"

    def test_future_timestamp_is_just_now(self):
        assert time_ago(NOW + timedelta(minutes=5), now=NOW) == "Just now"

    def test_defaults_to_current_time(self):
        assert time_ago(datetime.now(UTC)) == "Just now"
