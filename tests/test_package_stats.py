# =============================================================================
# tests/test_package_stats.py - Dashboard Aggregate Tests
# =============================================================================

from core.services.package_stats import compute_package_stats


def _pkg(code, status, created_at="2025-01-15T09:00:00+00:00", packer_name=""):
    return {"code": code, "status": status, "created_at": created_at, "packer_name": packer_name}


class TestComputePackageStats:

    def test_empty_input(self):
        stats = compute_package_stats([])

        assert stats.total == 0
        assert stats.by_status == {"pending": 0, "packed": 0, "dispatched": 0, "delivered": 0}
        assert stats.by_day == []
        assert stats.by_packer == {}

    def test_counts_by_status(self):
        stats = compute_package_stats([
            _pkg("1", "pending"),
            _pkg("2", "packed", packer_name="Alice"),
            _pkg("3", "packed", packer_name="Alice"),
            _pkg("4", "delivered", packer_name="Bob"),
        ])

        assert stats.total == 4
        assert stats.by_status == {"pending": 1, "packed": 2, "dispatched": 0, "delivered": 1}

    def test_missing_status_counts_as_pending(self):
        stats = compute_package_stats([
            _pkg("1", None),
            _pkg("2", ""),
            {"code": "3"},
        ])

        assert stats.by_status["pending"] == 3

    def test_by_day_is_sorted_and_complete(self):
        stats = compute_package_stats([
            _pkg("1", "pending", created_at="2025-01-16T10:00:00+00:00"),
            _pkg("2", "packed", created_at="2025-01-15T10:00:00+00:00"),
            _pkg("3", "packed", created_at="2025-01-15T12:00:00+00:00"),
        ])

        assert [d.date for d in stats.by_day] == ["2025-01-15", "2025-01-16"]
        first = stats.by_day[0]
        assert (first.pending, first.packed, first.dispatched, first.delivered) == (0, 2, 0, 0)
        assert stats.by_day[1].pending == 1

    def test_by_packer_ignores_pending_and_blank_names(self):
        stats = compute_package_stats([
            _pkg("1", "pending", packer_name="Carol"),
            _pkg("2", "packed", packer_name="Alice"),
            _pkg("3", "dispatched", packer_name="Alice"),
            _pkg("4", "delivered", packer_name="  "),
            _pkg("5", "delivered", packer_name="Bob"),
        ])

        assert stats.by_packer == {"Alice": 2, "Bob": 1}

    def test_unknown_status_is_counted_but_not_per_day(self):
        stats = compute_package_stats([_pkg("1", "lost"), _pkg("2", "packed")])

        assert stats.by_status["lost"] == 1
        assert sum(d.packed for d in stats.by_day) == 1
        assert stats.total == 2

    def test_mixed_timestamp_formats_all_count_per_day(self):
        stats = compute_package_stats([
            _pkg("1", "pending", created_at="2025-01-15T09:00:00.123456+00:00"),
            _pkg("2", "packed", created_at="2025-01-15T08:00:00+00:00"),
            _pkg("3", "delivered", created_at="2025-01-15T07:00:00Z"),
        ])

        assert len(stats.by_day) == 1
        day = stats.by_day[0]
        assert day.date == "2025-01-15"
        assert day.pending + day.packed + day.dispatched + day.delivered == stats.total == 3
