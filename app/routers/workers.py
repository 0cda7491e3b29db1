# =============================================================================
# app/routers/workers.py - Worker and Attendance Endpoints
# =============================================================================
# Worker registry and daily attendance. Everything here is administrative
# and requires a full-access session, except the present-packers list used
# by the packing scanner.
# =============================================================================

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from app.auth import SessionContext, require_full_access
from core.models.worker import (
    AttendanceResponse,
    AttendanceUpdate,
    AttendanceUpsert,
    WorkerCreate,
    WorkerResponse,
    WorkerUpdate,
)
from core.services.worker_service import AttendanceService, WorkerService

router = APIRouter()
attendance_router = APIRouter()

WorkerIdPath = Annotated[str, Path(min_length=1, description="Worker ID")]


# =============================================================================
# Workers
# =============================================================================

@router.post("", response_model=WorkerResponse, status_code=201)
async def create_worker(
    request: WorkerCreate,
    session: SessionContext = Depends(require_full_access),
):
    """Register a worker."""
    return WorkerService.create_worker(request)


@router.get("", response_model=list[WorkerResponse])
async def list_workers(
    packers_only: Annotated[bool, Query(description="Only workers flagged as packers")] = False,
    session: SessionContext = Depends(require_full_access),
):
    """List workers ordered by name."""
    return WorkerService.list_workers(packers_only=packers_only)


@router.get("/{worker_id}", response_model=WorkerResponse)
async def get_worker(
    worker_id: WorkerIdPath,
    session: SessionContext = Depends(require_full_access),
):
    return WorkerService.get_worker(worker_id)


@router.patch("/{worker_id}", response_model=WorkerResponse)
async def update_worker(
    worker_id: WorkerIdPath,
    request: WorkerUpdate,
    session: SessionContext = Depends(require_full_access),
):
    """Update worker details. Omitted fields are left unchanged."""
    return WorkerService.update_worker(worker_id, request)


@router.post("/{worker_id}/toggle-packer", response_model=WorkerResponse)
async def toggle_packer(
    worker_id: WorkerIdPath,
    session: SessionContext = Depends(require_full_access),
):
    """Flip whether the worker may be chosen as a packer."""
    return WorkerService.toggle_packer(worker_id)


@router.delete("/{worker_id}")
async def delete_worker(
    worker_id: WorkerIdPath,
    session: SessionContext = Depends(require_full_access),
):
    WorkerService.delete_worker(worker_id)
    return {"worker_id": worker_id, "message": "Worker deleted successfully"}


# =============================================================================
# Attendance
# =============================================================================

@attendance_router.put("", response_model=AttendanceResponse)
async def record_attendance(
    request: AttendanceUpsert,
    session: SessionContext = Depends(require_full_access),
):
    """
    Record attendance for a worker and day.

    Submitting again for the same worker and day replaces the record.
    """
    return AttendanceService.record_attendance(request)


@attendance_router.get("", response_model=list[AttendanceResponse])
async def list_attendance(
    day: Annotated[date | None, Query(alias="date", description="Only this day")] = None,
    days: Annotated[int | None, Query(ge=1, le=365, description="Lookback window in days")] = None,
    session: SessionContext = Depends(require_full_access),
):
    """List attendance for one day, or for the recent window."""
    if day:
        return AttendanceService.list_by_date(day)
    return AttendanceService.list_recent(days)


@attendance_router.get("/present-packers", response_model=list[WorkerResponse])
async def present_packers(
    day: Annotated[date | None, Query(alias="date", description="Defaults to today")] = None,
):
    """Packers marked present on a day; offered to the packing scanner."""
    return AttendanceService.present_packers(day or date.today())


@attendance_router.patch("/{attendance_id}", response_model=AttendanceResponse)
async def update_attendance(
    attendance_id: Annotated[str, Path(min_length=1)],
    request: AttendanceUpdate,
    session: SessionContext = Depends(require_full_access),
):
    return AttendanceService.update_attendance(attendance_id, request)
