# =============================================================================
# core/services/logbook_service.py - Hygiene and Lab Test Business Logic
# =============================================================================
# Daily hygiene photos (one per area per day) and monthly lab test reports.
# Files go to Supabase Storage; rows reference them by public URL.
# =============================================================================

import logging
from datetime import date
from typing import Any

from app.config import settings
from app.exceptions import LabTestNotFoundError
from core.models.logbook import (
    HYGIENE_AREA_LABELS,
    LAB_TEST_CATALOG,
    HygieneArea,
    HygieneAreaStatus,
    HygieneChecklist,
    HygieneRecordResponse,
    LabTestCategory,
    LabTestCategoryStatus,
    LabTestChecklist,
    LabTestType,
)
from core.services.storage_service import StorageService
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


class HygieneService:
    """
    Service for daily hygiene photo records.
    """

    @staticmethod
    def record_photo(
        worker_id: str,
        worker_name: str,
        day: date,
        area: HygieneArea,
        filename: str,
        content: bytes,
        content_type: str | None = None,
        notes: str | None = None,
    ) -> dict[str, Any]:
        """
        Upload a hygiene photo and record it for (day, area).

        A second photo for the same day and area replaces the first record
        through an upsert on (date, area).

        Raises:
            InvalidFileTypeError / FileTooLargeError: If the photo is rejected
            StorageUploadError: If the upload fails
        """
        extension = StorageService.validate_upload(filename, len(content))
        path = StorageService.build_path(
            "hygiene",
            [worker_id, area.value, day.isoformat()],
            extension,
        )
        photo_url = StorageService.upload_file(settings.HYGIENE_BUCKET, path, content, content_type)

        row = {
            "worker_id": worker_id,
            "worker_name": worker_name,
            "date": day.isoformat(),
            "area": area.value,
            "photo_url": photo_url,
            "notes": notes,
        }
        record = SupabaseClient.upsert_row(settings.HYGIENE_TABLE, row, on_conflict="date,area")
        logger.info(f"Recorded hygiene photo: {area.value} on {row['date']} by {worker_name}")
        return record

    @staticmethod
    def list_records(
        day: date | None = None,
        worker_id: str | None = None,
    ) -> list[dict[str, Any]]:
        """List hygiene records, newest first, optionally by day or worker."""
        eq: dict[str, Any] = {}
        if day:
            eq["date"] = day.isoformat()
        if worker_id:
            eq["worker_id"] = worker_id

        return SupabaseClient.fetch_rows(
            settings.HYGIENE_TABLE,
            eq=eq or None,
            order=[("date", True), ("created_at", True)],
        )

    @staticmethod
    def daily_checklist(day: date) -> HygieneChecklist:
        """Which areas have been photographed on `day`."""
        by_area: dict[str, dict[str, Any]] = {}
        for record in HygieneService.list_records(day=day):
            # Newest first, so keep the first record seen per area
            by_area.setdefault(record["area"], record)

        areas = []
        for area in HygieneArea:
            record = by_area.get(area.value)
            areas.append(HygieneAreaStatus(
                area=area,
                label=HYGIENE_AREA_LABELS[area],
                completed=record is not None,
                record=HygieneRecordResponse(**record) if record else None,
            ))

        return HygieneChecklist(
            date=day,
            completed=sum(1 for a in areas if a.completed),
            total=len(areas),
            areas=areas,
        )


class LabTestService:
    """
    Service for monthly lab test reports.
    """

    @staticmethod
    def record_report(
        test_type: LabTestType,
        category: LabTestCategory,
        product_name: str,
        month: str,
        filename: str,
        content: bytes,
        content_type: str | None = None,
        notes: str | None = None,
    ) -> dict[str, Any]:
        """
        Upload a lab test report and record it.

        Args:
            month: Reporting month in YYYY-MM format

        Raises:
            InvalidFileTypeError / FileTooLargeError: If the file is rejected
            StorageUploadError: If the upload fails
        """
        extension = StorageService.validate_upload(filename, len(content))
        path = StorageService.build_path(
            "lab-tests",
            [test_type.value, category.value, month],
            extension,
        )
        file_url = StorageService.upload_file(settings.LAB_TESTS_BUCKET, path, content, content_type)

        row = {
            "test_type": test_type.value,
            "category": category.value,
            "product_name": product_name,
            "month": month,
            "file_url": file_url,
            "notes": notes,
        }
        record = SupabaseClient.insert_row(settings.LAB_TESTS_TABLE, row)
        logger.info(f"Recorded lab test: {category.value} for {month}")
        return record

    @staticmethod
    def list_records(month: str | None = None) -> list[dict[str, Any]]:
        """List lab test records, newest month first, optionally for one month."""
        return SupabaseClient.fetch_rows(
            settings.LAB_TESTS_TABLE,
            eq={"month": month} if month else None,
            order=[("month", True), ("created_at", True)],
        )

    @staticmethod
    def delete_record(record_id: str) -> None:
        """
        Delete a lab test record.

        Raises:
            LabTestNotFoundError: If nothing was deleted
        """
        deleted = SupabaseClient.delete_rows(settings.LAB_TESTS_TABLE, "id", [record_id])
        if not deleted:
            raise LabTestNotFoundError(str(record_id))
        logger.info(f"Deleted lab test record: {record_id}")

    @staticmethod
    def monthly_checklist(month: str) -> LabTestChecklist:
        """Which categories have a report for `month`, and which required ones are missing."""
        done = {record["category"] for record in LabTestService.list_records(month=month)}

        categories = []
        for category, (test_type, label, required) in LAB_TEST_CATALOG.items():
            categories.append(LabTestCategoryStatus(
                category=category,
                test_type=test_type,
                label=label,
                required=required,
                completed=category.value in done,
            ))

        return LabTestChecklist(
            month=month,
            missing_required=[c.category for c in categories if c.required and not c.completed],
            categories=categories,
        )
