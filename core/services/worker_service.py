# =============================================================================
# core/services/worker_service.py - Worker and Attendance Business Logic
# =============================================================================
# Worker registry plus daily attendance. Attendance is keyed by
# (worker_id, date) and written with a single upsert, so recording the same
# day twice replaces the earlier record.
# =============================================================================

import logging
from datetime import date
from typing import Any

from app.config import settings
from app.exceptions import AttendanceNotFoundError, WorkerNotFoundError
from core.models.worker import (
    AttendanceStatus,
    AttendanceUpdate,
    AttendanceUpsert,
    WorkerCreate,
    WorkerUpdate,
)
from lib.supabase_client import SupabaseClient
from lib.utils import days_ago_date, utc_now_iso

logger = logging.getLogger(__name__)


class WorkerService:
    """
    Service for the worker registry.
    """

    @staticmethod
    def create_worker(data: WorkerCreate) -> dict[str, Any]:
        """Register a new worker and return the stored row."""
        worker = SupabaseClient.insert_row(settings.WORKERS_TABLE, data.model_dump())
        logger.info(f"Created worker: {worker.get('id')} ({data.name})")
        return worker

    @staticmethod
    def list_workers(packers_only: bool = False) -> list[dict[str, Any]]:
        """List workers ordered by name."""
        eq = {"is_packer": True} if packers_only else None
        return SupabaseClient.fetch_rows(
            settings.WORKERS_TABLE,
            eq=eq,
            order=[("name", False)],
        )

    @staticmethod
    def get_worker(worker_id: str) -> dict[str, Any]:
        """
        Get a worker by ID.

        Raises:
            WorkerNotFoundError: If the worker doesn't exist
        """
        worker = SupabaseClient.fetch_one(settings.WORKERS_TABLE, "id", worker_id)
        if not worker:
            raise WorkerNotFoundError(str(worker_id))
        return worker

    @staticmethod
    def update_worker(worker_id: str, data: WorkerUpdate) -> dict[str, Any]:
        """
        Apply a partial update to a worker.

        Raises:
            WorkerNotFoundError: If the worker doesn't exist
        """
        worker = WorkerService.get_worker(worker_id)

        update_data = data.model_dump(exclude_none=True)
        if not update_data:
            return worker  # Nothing to update
        update_data["updated_at"] = utc_now_iso()

        rows = SupabaseClient.update_rows(settings.WORKERS_TABLE, update_data, "id", worker_id)
        logger.info(f"Updated worker: {worker_id}")
        return rows[0] if rows else {**worker, **update_data}

    @staticmethod
    def toggle_packer(worker_id: str) -> dict[str, Any]:
        """Flip a worker's packer flag."""
        worker = WorkerService.get_worker(worker_id)
        return WorkerService.update_worker(
            worker_id,
            WorkerUpdate(is_packer=not worker.get("is_packer", False)),
        )

    @staticmethod
    def delete_worker(worker_id: str) -> None:
        """
        Remove a worker.

        Raises:
            WorkerNotFoundError: If nothing was deleted
        """
        deleted = SupabaseClient.delete_rows(settings.WORKERS_TABLE, "id", [worker_id])
        if not deleted:
            raise WorkerNotFoundError(str(worker_id))
        logger.info(f"Deleted worker: {worker_id}")


class AttendanceService:
    """
    Service for daily attendance records.
    """

    @staticmethod
    def record_attendance(data: AttendanceUpsert) -> dict[str, Any]:
        """
        Record a worker's attendance for a day.

        Uses an upsert on (worker_id, date) so a second submission for the
        same day replaces the first instead of creating a duplicate.

        Raises:
            WorkerNotFoundError: If worker_name is omitted and the worker doesn't exist
        """
        worker_name = data.worker_name
        if not worker_name:
            worker_name = WorkerService.get_worker(data.worker_id)["name"]

        row = {
            "worker_id": data.worker_id,
            "worker_name": worker_name,
            "date": data.date.isoformat(),
            "status": data.status.value,
            "overtime": data.overtime.value,
            "notes": data.notes or "",
            "updated_at": utc_now_iso(),
        }

        record = SupabaseClient.upsert_row(
            settings.ATTENDANCE_TABLE,
            row,
            on_conflict="worker_id,date",
        )
        logger.info(f"Recorded attendance: {data.worker_id} on {row['date']} = {row['status']}")
        return record

    @staticmethod
    def list_recent(days: int | None = None) -> list[dict[str, Any]]:
        """Attendance over the last `days` days, newest date first."""
        since = days_ago_date(days or settings.ATTENDANCE_RECENT_DAYS)
        return SupabaseClient.fetch_rows(
            settings.ATTENDANCE_TABLE,
            gte={"date": since},
            order=[("date", True), ("worker_name", False)],
        )

    @staticmethod
    def list_by_date(day: date) -> list[dict[str, Any]]:
        """Attendance for one day, ordered by worker name."""
        return SupabaseClient.fetch_rows(
            settings.ATTENDANCE_TABLE,
            eq={"date": day.isoformat()},
            order=[("worker_name", False)],
        )

    @staticmethod
    def update_attendance(attendance_id: str, data: AttendanceUpdate) -> dict[str, Any]:
        """
        Update status, overtime and notes of an existing record.

        Raises:
            AttendanceNotFoundError: If the record doesn't exist
        """
        update_data = {
            "status": data.status.value,
            "overtime": data.overtime.value,
            "notes": data.notes or "",
            "updated_at": utc_now_iso(),
        }
        rows = SupabaseClient.update_rows(settings.ATTENDANCE_TABLE, update_data, "id", attendance_id)
        if not rows:
            raise AttendanceNotFoundError(str(attendance_id))
        return rows[0]

    @staticmethod
    def present_packers(day: date) -> list[dict[str, Any]]:
        """
        Packers who are marked present on `day`.

        Used to offer packer names when a package is packed.
        """
        present_ids = {
            row["worker_id"]
            for row in SupabaseClient.fetch_rows(
                settings.ATTENDANCE_TABLE,
                columns="worker_id",
                eq={"date": day.isoformat(), "status": AttendanceStatus.PRESENT.value},
            )
        }
        if not present_ids:
            return []

        return [
            worker for worker in WorkerService.list_workers(packers_only=True)
            if worker.get("id") in present_ids
        ]
