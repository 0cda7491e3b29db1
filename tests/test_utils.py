# =============================================================================
# tests/test_utils.py - Shared Utility Tests
# =============================================================================

from datetime import date, datetime, timezone

from lib.utils import days_ago_date, file_extension, local_today


class TestLocalToday:

    def test_ahead_of_utc_rolls_over_first(self):
        now = datetime(2025, 1, 15, 20, 0, tzinfo=timezone.utc)

        assert local_today("Asia/Kolkata", now=now) == date(2025, 1, 16)
        assert local_today("UTC", now=now) == date(2025, 1, 15)

    def test_behind_utc_stays_on_previous_day(self):
        now = datetime(2025, 1, 16, 2, 0, tzinfo=timezone.utc)

        assert local_today("America/New_York", now=now) == date(2025, 1, 15)


class TestHelpers:

    def test_days_ago_date(self):
        assert days_ago_date(30, today=date(2025, 1, 31)) == "2025-01-01"

    def test_file_extension(self):
        assert file_extension("IMG.JPEG") == ".jpeg"
        assert file_extension("noext") == ""
