# =============================================================================
# app/routers/batch_counter.py - Batch Counter Endpoints
# =============================================================================
# Machines post readings here; dashboards read them back.
# =============================================================================

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Path, Query
from pydantic import BaseModel

from app.exceptions import OpsTrackException
from core.models.batch_counter import BatchCounterStats, BatchReadingCreate, BatchReadingResponse
from core.services.batch_counter_service import BatchCounterService, DEFAULT_LIMIT

router = APIRouter()


class ReadingReceivedResponse(BaseModel):
    success: bool = True
    message: str = "Batch data received successfully"
    data: BatchReadingResponse


@router.post("", response_model=ReadingReceivedResponse)
async def receive_reading(request: BatchReadingCreate):
    """Store a reading pushed by a batch counter machine."""
    reading = BatchCounterService.record_reading(request)
    return ReadingReceivedResponse(data=reading)


@router.get("", response_model=list[BatchReadingResponse])
async def list_readings(
    machine_id: Annotated[str | None, Query()] = None,
    start: Annotated[datetime | None, Query()] = None,
    end: Annotated[datetime | None, Query()] = None,
    limit: Annotated[int, Query(ge=1, le=DEFAULT_LIMIT)] = DEFAULT_LIMIT,
):
    return BatchCounterService.list_readings(
        machine_id=machine_id,
        start=start.isoformat() if start else None,
        end=end.isoformat() if end else None,
        limit=limit,
    )


@router.get("/today", response_model=list[BatchReadingResponse])
async def today_readings(machine_id: Annotated[str | None, Query()] = None):
    return BatchCounterService.today_readings(machine_id=machine_id)


@router.get("/machines", response_model=list[str])
async def machine_ids():
    return BatchCounterService.machine_ids()


@router.get("/stats", response_model=list[BatchCounterStats])
async def stats_last_hour():
    """Per-machine aggregates over the last hour."""
    return BatchCounterService.stats_last_hour()


@router.get("/machines/{machine_id}/latest", response_model=BatchReadingResponse)
async def latest_reading(machine_id: Annotated[str, Path(min_length=1)]):
    reading = BatchCounterService.latest_reading(machine_id)
    if reading is None:
        raise OpsTrackException(
            message=f"No readings for machine: {machine_id}",
            code="NO_READINGS",
            status_code=404,
            details={"machine_id": machine_id},
        )
    return reading
