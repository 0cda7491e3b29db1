# =============================================================================
# app/routers/logbook.py - Hygiene and Lab Test Endpoints
# =============================================================================
# Multipart uploads of hygiene photos and lab test reports, plus the
# daily/monthly checklists. All endpoints require a full-access session.
# =============================================================================

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Path, Query, UploadFile

from app.auth import SessionContext, require_full_access
from core.models.logbook import (
    HygieneArea,
    HygieneChecklist,
    HygieneRecordResponse,
    LabTestCategory,
    LabTestChecklist,
    LabTestRecordResponse,
    LabTestType,
)
from core.services.logbook_service import HygieneService, LabTestService

hygiene_router = APIRouter()
lab_tests_router = APIRouter()

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


# =============================================================================
# Hygiene
# =============================================================================

@hygiene_router.post("", response_model=HygieneRecordResponse, status_code=201)
async def upload_hygiene_photo(
    worker_id: Annotated[str, Form(min_length=1)],
    worker_name: Annotated[str, Form(min_length=1)],
    area: Annotated[HygieneArea, Form()],
    file: Annotated[UploadFile, File(description="Photo of the cleaned area")],
    day: Annotated[date | None, Form(alias="date")] = None,
    notes: Annotated[str | None, Form()] = None,
    session: SessionContext = Depends(require_full_access),
):
    """
    Upload today's photo for an area.

    A second photo for the same day and area replaces the first.
    """
    content = await file.read()
    return HygieneService.record_photo(
        worker_id=worker_id,
        worker_name=worker_name,
        day=day or date.today(),
        area=area,
        filename=file.filename or "",
        content=content,
        content_type=file.content_type,
        notes=notes,
    )


@hygiene_router.get("", response_model=list[HygieneRecordResponse])
async def list_hygiene_records(
    day: Annotated[date | None, Query(alias="date")] = None,
    worker_id: Annotated[str | None, Query()] = None,
    session: SessionContext = Depends(require_full_access),
):
    return HygieneService.list_records(day=day, worker_id=worker_id)


@hygiene_router.get("/checklist", response_model=HygieneChecklist)
async def hygiene_checklist(
    day: Annotated[date | None, Query(alias="date", description="Defaults to today")] = None,
    session: SessionContext = Depends(require_full_access),
):
    """Which areas still need a photo today."""
    return HygieneService.daily_checklist(day or date.today())


# =============================================================================
# Lab Tests
# =============================================================================

@lab_tests_router.post("", response_model=LabTestRecordResponse, status_code=201)
async def upload_lab_test(
    test_type: Annotated[LabTestType, Form()],
    category: Annotated[LabTestCategory, Form()],
    product_name: Annotated[str, Form(min_length=1)],
    month: Annotated[str, Form(pattern=MONTH_PATTERN, description="YYYY-MM")],
    file: Annotated[UploadFile, File(description="Lab report")],
    notes: Annotated[str | None, Form()] = None,
    session: SessionContext = Depends(require_full_access),
):
    """Upload a lab test report for a month."""
    content = await file.read()
    return LabTestService.record_report(
        test_type=test_type,
        category=category,
        product_name=product_name,
        month=month,
        filename=file.filename or "",
        content=content,
        content_type=file.content_type,
        notes=notes,
    )


@lab_tests_router.get("", response_model=list[LabTestRecordResponse])
async def list_lab_tests(
    month: Annotated[str | None, Query(pattern=MONTH_PATTERN)] = None,
    session: SessionContext = Depends(require_full_access),
):
    return LabTestService.list_records(month=month)


@lab_tests_router.get("/checklist", response_model=LabTestChecklist)
async def lab_test_checklist(
    month: Annotated[str | None, Query(pattern=MONTH_PATTERN, description="Defaults to this month")] = None,
    session: SessionContext = Depends(require_full_access),
):
    """Which required reports are still missing for a month."""
    return LabTestService.monthly_checklist(month or date.today().strftime("%Y-%m"))


@lab_tests_router.delete("/{record_id}")
async def delete_lab_test(
    record_id: Annotated[str, Path(min_length=1)],
    session: SessionContext = Depends(require_full_access),
):
    LabTestService.delete_record(record_id)
    return {"record_id": record_id, "message": "Lab test record deleted successfully"}
