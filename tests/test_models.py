# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the request/response models to ensure:
# - Valid data is accepted and parsed correctly
# - Invalid data raises ValidationError
# - Default values work as expected
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

from datetime import date

import pytest
from pydantic import ValidationError

from core.models import (
    AttendanceUpsert,
    BatchReadingCreate,
    BulkPackageCreate,
    LAB_TEST_CATALOG,
    LabTestCategory,
    LabTestType,
    Overtime,
    PackageResponse,
    PackingStatus,
    StatusUpdateRequest,
    WorkerUpdate,
)


# =============================================================================
# Package Model Tests
# =============================================================================

class TestStatusUpdateRequest:

    def test_valid_request(self):
        request = StatusUpdateRequest(status="packed", weight="2kg", packer_name="Alice")

        assert request.status == PackingStatus.PACKED
        assert request.shipping_location is None

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            StatusUpdateRequest(status="lost")

    def test_empty_shipping_location_is_kept(self):
        request = StatusUpdateRequest(status="dispatched", shipping_location="")

        assert request.shipping_location == ""


class TestBulkPackageCreate:

    @pytest.mark.parametrize("count", [0, 501])
    def test_count_bounds(self, count):
        with pytest.raises(ValidationError):
            BulkPackageCreate(count=count)

    def test_defaults(self):
        assert BulkPackageCreate(count=5).description == ""


class TestPackageResponse:

    def test_passes_unknown_status_through(self):
        response = PackageResponse(code="A", status="lost")

        assert response.status == "lost"

    def test_defaults_to_pending(self):
        assert PackageResponse(code="A").status == "pending"

    def test_parses_timestamps(self):
        response = PackageResponse(code="A", packed_at="2025-01-15T09:00:00+00:00")

        assert response.packed_at.year == 2025


# =============================================================================
# Worker Model Tests
# =============================================================================

class TestWorkerModels:

    def test_attendance_defaults(self):
        record = AttendanceUpsert(worker_id="w-1", date="2025-01-15", status="present")

        assert record.date == date(2025, 1, 15)
        assert record.overtime == Overtime.NO
        assert record.notes == ""

    def test_attendance_rejects_unknown_status(self):
        with pytest.raises(ValidationError):
            AttendanceUpsert(worker_id="w-1", date="2025-01-15", status="on_leave")

    def test_worker_update_dump_skips_unset(self):
        assert WorkerUpdate(is_packer=False).model_dump(exclude_none=True) == {"is_packer": False}


# =============================================================================
# Logbook and Batch Counter Model Tests
# =============================================================================

class TestLabTestCatalog:

    def test_every_category_is_catalogued(self):
        assert set(LAB_TEST_CATALOG) == set(LabTestCategory)

    def test_only_popsicles_are_optional(self):
        optional = [c for c, (_, _, required) in LAB_TEST_CATALOG.items() if not required]
        assert optional == [LabTestCategory.POPSICLES]

    def test_raw_materials(self):
        raw = {c for c, (t, _, _) in LAB_TEST_CATALOG.items() if t == LabTestType.RAW_MATERIAL}
        assert raw == {LabTestCategory.WATER, LabTestCategory.SUGAR, LabTestCategory.TAMARIND}


class TestBatchReadingCreate:

    def test_defaults(self):
        reading = BatchReadingCreate(machine_id="line-1", batch_count=10)

        assert reading.status == "running"
        assert reading.metadata == {}
        assert reading.timestamp is None

    def test_negative_count_rejected(self):
        with pytest.raises(ValidationError):
            BatchReadingCreate(machine_id="line-1", batch_count=-1)

    def test_machine_id_required(self):
        with pytest.raises(ValidationError):
            BatchReadingCreate(machine_id="", batch_count=1)
