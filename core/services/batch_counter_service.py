# =============================================================================
# core/services/batch_counter_service.py - Batch Counter Readings
# =============================================================================
# Machines on the production line push their running batch counts here.
# Readings are stored as-is; aggregates come from a database view.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any

from app.config import settings
from core.models.batch_counter import BatchReadingCreate
from lib.supabase_client import SupabaseClient
from lib.utils import utc_now

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 1000


class BatchCounterService:
    """
    Service for batch counter readings.
    """

    @staticmethod
    def record_reading(data: BatchReadingCreate) -> dict[str, Any]:
        """Store one machine reading; timestamp defaults to now."""
        timestamp = data.timestamp or utc_now()
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)

        row = {
            "machine_id": data.machine_id,
            "batch_count": data.batch_count,
            "production_rate": data.production_rate,
            "status": data.status or "running",
            "metadata": data.metadata,
            "timestamp": timestamp.isoformat(),
        }
        reading = SupabaseClient.insert_row(settings.BATCH_COUNTER_TABLE, row)
        logger.debug(f"Batch reading from {data.machine_id}: {data.batch_count}")
        return reading

    @staticmethod
    def list_readings(
        machine_id: str | None = None,
        start: str | None = None,
        end: str | None = None,
        limit: int = DEFAULT_LIMIT,
    ) -> list[dict[str, Any]]:
        """Readings, newest first, optionally filtered by machine and time range."""
        return SupabaseClient.fetch_rows(
            settings.BATCH_COUNTER_TABLE,
            eq={"machine_id": machine_id} if machine_id else None,
            gte={"timestamp": start} if start else None,
            lte={"timestamp": end} if end else None,
            order=[("timestamp", True)],
            limit=limit,
        )

    @staticmethod
    def latest_reading(machine_id: str) -> dict[str, Any] | None:
        rows = BatchCounterService.list_readings(machine_id=machine_id, limit=1)
        return rows[0] if rows else None

    @staticmethod
    def today_readings(machine_id: str | None = None, now: datetime | None = None) -> list[dict[str, Any]]:
        """Readings since midnight UTC."""
        now = now or utc_now()
        start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
        return BatchCounterService.list_readings(machine_id=machine_id, start=start_of_day.isoformat())

    @staticmethod
    def machine_ids() -> list[str]:
        """Distinct machine IDs, sorted."""
        rows = SupabaseClient.fetch_rows(
            settings.BATCH_COUNTER_TABLE,
            columns="machine_id",
            order=[("machine_id", False)],
        )
        return sorted({row["machine_id"] for row in rows if row.get("machine_id")})

    @staticmethod
    def stats_last_hour() -> list[dict[str, Any]]:
        """Per-machine aggregates from the last-hour view."""
        return SupabaseClient.fetch_rows(settings.BATCH_COUNTER_STATS_VIEW)
