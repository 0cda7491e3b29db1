# =============================================================================
# tests/test_package_service.py - Package Service Tests
# =============================================================================
# This module contains tests for:
# - Status updates through the transition guard
# - Code generation
# - Local cache fallback when Supabase is unreachable
#
# Tests use a mocked SupabaseClient to avoid database calls.
# =============================================================================

from datetime import date, datetime, timezone
from unittest.mock import patch

import pytest

from app.config import settings
from app.exceptions import (
    AlreadyDeliveredError,
    InvalidTransitionError,
    PackageCodeConflictError,
    PackageNotFoundError,
)
from core.models.package import PackingStatus
from core.services.package_service import PackageService, build_status_update
from lib.supabase_client import SupabaseClientError
from lib.utils import utc_now_iso


@pytest.fixture
def mock_db():
    with patch("core.services.package_service.SupabaseClient") as mock:
        mock.update_rows.side_effect = lambda table, payload, column, value: [
            {**mock.fetch_one.return_value, **payload}
        ]
        yield mock


# =============================================================================
# build_status_update
# =============================================================================

class TestBuildStatusUpdate:

    def test_packed_sets_weight_packer_and_packed_at(self):
        payload = build_status_update(
            PackingStatus.PACKED, weight="2.5kg", packer_name="Alice", now="T"
        )
        assert payload == {
            "status": "packed",
            "updated_at": "T",
            "weight": "2.5kg",
            "packer_name": "Alice",
            "packed_at": "T",
        }

    def test_dispatched_sets_shipped_at(self):
        payload = build_status_update(PackingStatus.DISPATCHED, shipping_location="Lagos", now="T")
        assert payload["shipped_at"] == "T"
        assert payload["shipping_location"] == "Lagos"
        assert "packed_at" not in payload

    def test_empty_weight_and_packer_are_not_written(self):
        payload = build_status_update(PackingStatus.PACKED, weight="", packer_name="")
        assert "weight" not in payload
        assert "packer_name" not in payload

    def test_empty_shipping_location_is_written(self):
        payload = build_status_update(PackingStatus.DISPATCHED, shipping_location="")
        assert payload["shipping_location"] == ""

    def test_omitted_shipping_location_is_not_written(self):
        payload = build_status_update(PackingStatus.DELIVERED)
        assert "shipping_location" not in payload
        assert set(payload) == {"status", "updated_at"}


# =============================================================================
# update_status
# =============================================================================

class TestUpdateStatus:

    def test_pending_to_packed(self, mock_db, pending_package):
        mock_db.fetch_one.return_value = pending_package

        result = PackageService.update_status(
            pending_package["code"],
            PackingStatus.PACKED,
            weight="2.5kg",
            packer_name="Alice",
        )

        assert result["status"] == "packed"
        assert result["weight"] == "2.5kg"
        assert result["packer_name"] == "Alice"
        assert result["packed_at"] == result["updated_at"]
        assert result["updated_at"] > pending_package["updated_at"]

        table, payload, column, value = mock_db.update_rows.call_args.args
        assert column == "code"
        assert value == pending_package["code"]
        assert payload["status"] == "packed"

    def test_delivered_to_packed_is_rejected_without_writing(self, mock_db, pending_package):
        mock_db.fetch_one.return_value = {**pending_package, "status": "delivered"}

        with pytest.raises(InvalidTransitionError) as exc_info:
            PackageService.update_status(pending_package["code"], PackingStatus.PACKED)

        assert exc_info.value.current_status == "delivered"
        assert exc_info.value.requested_status == "packed"
        assert exc_info.value.message == "Invalid status transition: delivered → packed"
        mock_db.update_rows.assert_not_called()

    def test_dispatched_to_packed_is_rejected(self, mock_db, pending_package):
        mock_db.fetch_one.return_value = {**pending_package, "status": "dispatched"}

        with pytest.raises(InvalidTransitionError):
            PackageService.update_status(pending_package["code"], PackingStatus.PACKED)
        mock_db.update_rows.assert_not_called()

    def test_redelivery_is_rejected(self, mock_db, pending_package):
        mock_db.fetch_one.return_value = {**pending_package, "status": "delivered"}

        with pytest.raises(AlreadyDeliveredError):
            PackageService.update_status(pending_package["code"], PackingStatus.DELIVERED)
        mock_db.update_rows.assert_not_called()

    def test_redelivery_is_a_rejected_transition(self, mock_db, pending_package):
        mock_db.fetch_one.return_value = {**pending_package, "status": "delivered"}

        with pytest.raises(InvalidTransitionError) as exc_info:
            PackageService.update_status(pending_package["code"], PackingStatus.DELIVERED)

        assert exc_info.value.code == "ALREADY_DELIVERED"
        assert exc_info.value.current_status == "delivered"
        assert exc_info.value.requested_status == "delivered"

    def test_update_matching_no_rows_raises_not_found(self, mock_db, local_cache, pending_package):
        mock_db.fetch_one.return_value = pending_package
        mock_db.update_rows.side_effect = None
        mock_db.update_rows.return_value = []

        with pytest.raises(PackageNotFoundError):
            PackageService.update_status(pending_package["code"], PackingStatus.PACKED)
        assert local_cache.get(pending_package["code"]) is None

    def test_packed_resubmission_is_allowed(self, mock_db, pending_package):
        mock_db.fetch_one.return_value = {**pending_package, "status": "packed", "weight": "1kg"}

        result = PackageService.update_status(
            pending_package["code"], PackingStatus.PACKED, weight="1.2kg"
        )

        assert result["status"] == "packed"
        assert result["weight"] == "1.2kg"

    def test_dispatch_sets_shipped_at_and_location(self, mock_db, pending_package):
        mock_db.fetch_one.return_value = {**pending_package, "status": "packed"}

        result = PackageService.update_status(
            pending_package["code"],
            PackingStatus.DISPATCHED,
            shipping_location="Warehouse B",
        )

        assert result["status"] == "dispatched"
        assert result["shipping_location"] == "Warehouse B"
        assert result["shipped_at"] == result["updated_at"]

    def test_unknown_code_raises_not_found(self, mock_db):
        mock_db.fetch_one.return_value = None

        with pytest.raises(PackageNotFoundError):
            PackageService.update_status("missing", PackingStatus.PACKED)

    def test_lookup_searches_all_records_after_recent_window(self, mock_db, pending_package):
        mock_db.fetch_one.side_effect = [None, pending_package]

        package = PackageService.get_package(pending_package["code"])

        assert package == pending_package
        first, second = mock_db.fetch_one.call_args_list
        assert "gte" in first.kwargs
        assert "gte" not in second.kwargs

    def test_falls_back_to_cache_when_supabase_is_down(self, mock_db, local_cache, pending_package):
        mock_db.fetch_one.side_effect = SupabaseClientError("connection refused")
        local_cache.save(pending_package)

        result = PackageService.update_status(
            pending_package["code"], PackingStatus.PACKED, packer_name="Bob"
        )

        assert result["status"] == "packed"
        assert local_cache.get(pending_package["code"])["packer_name"] == "Bob"
        mock_db.update_rows.assert_not_called()

    def test_guard_applies_to_cached_records(self, mock_db, local_cache, pending_package):
        mock_db.fetch_one.side_effect = SupabaseClientError("connection refused")
        local_cache.save({**pending_package, "status": "dispatched"})

        with pytest.raises(InvalidTransitionError):
            PackageService.update_status(pending_package["code"], PackingStatus.PACKED)
        assert local_cache.get(pending_package["code"])["status"] == "dispatched"

    def test_failed_remote_write_is_kept_in_cache(self, mock_db, local_cache, pending_package):
        mock_db.fetch_one.return_value = pending_package
        mock_db.update_rows.side_effect = SupabaseClientError("timeout")

        result = PackageService.update_status(pending_package["code"], PackingStatus.PACKED)

        assert result["status"] == "packed"
        assert local_cache.get(pending_package["code"])["status"] == "packed"


# =============================================================================
# Code generation
# =============================================================================

class TestGenerateCodes:

    def test_continues_after_highest_serial_today(self, mock_db):
        mock_db.fetch_rows.return_value = [
            {"code": "25011500007"},
            {"code": "25011500003"},
            {"code": "25011400099"},
            {"code": "manual-code"},
        ]

        codes = PackageService.generate_codes(2, today=date(2025, 1, 15))

        assert codes == ["25011500008", "25011500009"]

    def test_first_code_of_the_day(self, mock_db):
        mock_db.fetch_rows.return_value = []

        assert PackageService.generate_code(today=date(2025, 1, 15)) == "25011500001"

    def test_counts_cached_codes(self, mock_db, local_cache):
        mock_db.fetch_rows.return_value = [{"code": "25011500002"}]
        local_cache.save({"code": "25011500005", "created_at": utc_now_iso()})

        assert PackageService.generate_code(today=date(2025, 1, 15)) == "25011500006"

    def test_queries_only_the_top_code_for_today(self, mock_db):
        mock_db.fetch_rows.return_value = [{"code": "25011501200"}]

        assert PackageService.generate_code(today=date(2025, 1, 15)) == "25011501201"

        kwargs = mock_db.fetch_rows.call_args.kwargs
        assert kwargs["like"] == {"code": "250115_____"}
        assert kwargs["order"] == [("code", True)]
        assert kwargs["limit"] == 1

    def test_prefix_uses_configured_timezone(self, mock_db):
        mock_db.fetch_rows.return_value = []
        # 20:00 UTC on the 15th is already the 16th in India
        evening_utc = datetime(2025, 1, 15, 20, 0, tzinfo=timezone.utc)

        with patch.object(settings, "CODE_TIMEZONE", "Asia/Kolkata"), \
                patch("lib.utils.utc_now", return_value=evening_utc):
            code = PackageService.generate_code()

        assert code == "25011600001"

    def test_offline_codes_keep_the_format(self, mock_db):
        mock_db.fetch_rows.side_effect = SupabaseClientError("offline")

        codes = PackageService.generate_codes(3, today=date(2025, 1, 15))

        assert len(codes) == 3
        for code in codes:
            assert len(code) == 11
            assert code.startswith("250115")
            assert code.isdigit()


# =============================================================================
# Create
# =============================================================================

class TestCreatePackage:

    def test_creates_pending_package(self, mock_db):
        mock_db.insert_row.side_effect = lambda table, data: {"id": "pkg-9", **data}

        package = PackageService.create_package(code="25011500009", description="Popsicles")

        assert package["status"] == "pending"
        assert package["code"] == "25011500009"
        assert package["description"] == "Popsicles"

    def test_duplicate_code_raises_conflict(self, mock_db):
        mock_db.insert_row.side_effect = SupabaseClientError(
            'duplicate key value violates unique constraint "qr_codes_code_key"'
        )

        with pytest.raises(PackageCodeConflictError):
            PackageService.create_package(code="25011500001")

    def test_saves_to_cache_when_supabase_is_down(self, mock_db, local_cache):
        mock_db.insert_row.side_effect = SupabaseClientError("connection refused")

        package = PackageService.create_package(code="25011500004")

        assert local_cache.get("25011500004")["status"] == "pending"
        assert package["code"] == "25011500004"

    def test_bulk_create_skips_failed_rows(self, mock_db):
        mock_db.fetch_rows.return_value = []
        mock_db.insert_row.side_effect = [
            {"code": "a"},
            SupabaseClientError('duplicate key value violates unique constraint'),
            {"code": "c"},
        ]

        created = PackageService.create_packages(3)

        assert [p["code"] for p in created] == ["a", "c"]


# =============================================================================
# List / delete
# =============================================================================

class TestListAndDelete:

    def test_list_recent_falls_back_to_cache(self, mock_db, local_cache):
        mock_db.fetch_rows.side_effect = SupabaseClientError("offline")
        local_cache.save({"code": "new", "created_at": utc_now_iso()})
        local_cache.save({"code": "old", "created_at": "2000-01-01T00:00:00+00:00"})

        packages = PackageService.list_recent()

        assert [p["code"] for p in packages] == ["new"]

    def test_delete_packages_counts_removed_codes(self, mock_db, local_cache):
        mock_db.delete_rows.return_value = [{"code": "a"}, {"code": "b"}]
        local_cache.save({"code": "a"})

        assert PackageService.delete_packages(["a", "b"]) == 2
        assert local_cache.get("a") is None

    def test_delete_missing_package_raises_not_found(self, mock_db):
        mock_db.delete_rows.return_value = []

        with pytest.raises(PackageNotFoundError):
            PackageService.delete_package("missing")

    def test_delete_propagates_error_when_nothing_cached(self, mock_db):
        mock_db.delete_rows.side_effect = SupabaseClientError("offline")

        with pytest.raises(SupabaseClientError):
            PackageService.delete_packages(["a"])
