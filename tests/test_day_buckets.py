"""
Tests for local-day bucketing.
"""
from datetime import date, datetime, timedelta, timezone

from app.utils.day_buckets import day_bucket, day_window, days_ago_bucket, from_unix


class TestDayWindow:
    """Tests for day_window bounds."""

    def test_utc_window_spans_whole_day(self):
        start, end = day_window(datetime(2024, 1, 3, 15, 30, tzinfo=timezone.utc))
        assert start == datetime(2024, 1, 3, tzinfo=timezone.utc)
        assert end - start == timedelta(days=1) - timedelta(milliseconds=1)

    def test_naive_instant_treated_as_utc(self):
        start, _ = day_window(datetime(2024, 1, 3, 0, 0, 1))
        assert start.date() == date(2024, 1, 3)

    def test_instant_inside_its_own_window(self):
        instant = datetime(2024, 6, 1, 23, 59, 59, tzinfo=timezone.utc)
        start, end = day_window(instant)
        assert start <= instant <= end

    def test_local_timezone_shifts_the_day(self):
        # 03:00 UTC is still the previous evening in New York
        instant = datetime(2024, 1, 3, 3, 0, tzinfo=timezone.utc)
        start, _ = day_window(instant, "America/New_York")
        assert start.date() == date(2024, 1, 2)


class TestDayBucket:
    """Tests for day_bucket and helpers."""

    def test_same_day_same_bucket(self):
        morning = datetime(2024, 1, 1, 0, 0, tzinfo=timezone.utc)
        night = datetime(2024, 1, 1, 23, 59, 59, 999000, tzinfo=timezone.utc)
        assert day_bucket(morning) == day_bucket(night) == date(2024, 1, 1)

    def test_midnight_starts_new_bucket(self):
        assert day_bucket(datetime(2024, 1, 2, tzinfo=timezone.utc)) == date(2024, 1, 2)

    def test_from_unix(self):
        assert from_unix(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)

    def test_days_ago_bucket(self):
        now = datetime(2024, 1, 10, 8, 0, tzinfo=timezone.utc)
        assert days_ago_bucket(6, now=now) == date(2024, 1, 4)
