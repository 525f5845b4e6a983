"""
Tests for datetime utilities module.
"""
from datetime import datetime, timedelta, timezone

import pytest

from app.core.datetime_utils import ensure_timezone_aware, utc_now


class TestEnsureTimezoneAware:
    """Tests for ensure_timezone_aware function."""

    def test_naive_datetime_becomes_utc(self):
        """Test that a naive datetime (as read back from SQLite) is treated as UTC."""
        result = ensure_timezone_aware(datetime(2024, 1, 15, 12, 30, 45))

        assert result == datetime(2024, 1, 15, 12, 30, 45, tzinfo=timezone.utc)

    def test_aware_datetime_unchanged(self):
        offset = timezone(timedelta(hours=-5))
        aware = datetime(2024, 1, 15, 12, 30, tzinfo=offset)

        assert ensure_timezone_aware(aware) is aware

    def test_none_raises_value_error(self):
        with pytest.raises(ValueError, match="datetime cannot be None"):
            ensure_timezone_aware(None)


class TestUtcNow:
    def test_returns_utc_timezone(self):
        assert utc_now().tzinfo == timezone.utc

    def test_is_close_to_system_time(self):
        delta = abs(utc_now() - datetime.now(timezone.utc))

        assert delta < timedelta(seconds=1)
