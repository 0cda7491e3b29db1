# =============================================================================
# app/routers/packages.py - Package Tracking Endpoints
# =============================================================================
# QR code generation records, scanner status updates and dashboard stats.
# Scanning endpoints are open; deletions require a full-access session.
# =============================================================================

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query
from pydantic import BaseModel

from app.auth import SessionContext, require_full_access
from core.lifecycle import allowed_next_statuses
from core.models.package import (
    AssignWorkerRequest,
    BulkPackageCreate,
    DeletePackagesRequest,
    PackageCreate,
    PackageList,
    PackageResponse,
    PackageStats,
    PackingStatus,
    StatusUpdateRequest,
)
from core.services.package_service import PackageService
from core.services.package_stats import compute_package_stats

router = APIRouter()

CodePath = Annotated[str, Path(min_length=1, max_length=64, description="Package code")]


# =============================================================================
# Response Models
# =============================================================================

class NextCodeResponse(BaseModel):
    code: str


class PackageDetailResponse(BaseModel):
    package: PackageResponse
    next_statuses: list[PackingStatus]


class DeleteResponse(BaseModel):
    deleted: int
    message: str


# =============================================================================
# Endpoints
# =============================================================================

@router.post("", response_model=PackageResponse, status_code=201)
async def create_package(request: PackageCreate):
    """
    Create a package in the pending state.

    Omit `code` to get the next generated code for today.
    """
    return PackageService.create_package(
        code=request.code,
        description=request.description,
        assigned_worker=request.assigned_worker,
    )


@router.post("/bulk", response_model=PackageList, status_code=201)
async def create_packages(request: BulkPackageCreate):
    """Create several packages with consecutive codes."""
    packages = PackageService.create_packages(request.count, description=request.description)
    return PackageList(packages=packages, total=len(packages))


@router.get("", response_model=PackageList)
async def list_packages(
    days: Annotated[int | None, Query(ge=1, le=365, description="Lookback window in days")] = None,
    start: Annotated[datetime | None, Query(description="Created at or after")] = None,
    end: Annotated[datetime | None, Query(description="Created at or before")] = None,
    status: Annotated[PackingStatus | None, Query(description="Filter by status")] = None,
):
    """
    List packages, newest first.

    Defaults to the recent window; pass `start`/`end` for an explicit range.
    """
    if start:
        packages = PackageService.list_by_date_range(
            start.isoformat(),
            end.isoformat() if end else None,
        )
    else:
        packages = PackageService.list_recent(days)

    if status:
        packages = [p for p in packages if (p.get("status") or PackingStatus.PENDING.value) == status.value]

    return PackageList(packages=packages, total=len(packages))


@router.get("/stats", response_model=PackageStats)
async def package_stats(
    days: Annotated[int | None, Query(ge=1, le=365, description="Lookback window in days")] = None,
):
    """Dashboard counts by status, by day and by packer."""
    return compute_package_stats(PackageService.list_recent(days))


@router.get("/next-code", response_model=NextCodeResponse)
async def next_code():
    """Preview the next code that would be generated today."""
    return NextCodeResponse(code=PackageService.generate_code())


@router.post("/delete", response_model=DeleteResponse)
async def delete_packages(
    request: DeletePackagesRequest,
    session: SessionContext = Depends(require_full_access),
):
    """Delete several packages by code. Requires full access."""
    deleted = PackageService.delete_packages(request.codes)
    return DeleteResponse(deleted=deleted, message=f"Deleted {deleted} packages")


@router.get("/{code}", response_model=PackageDetailResponse)
async def get_package(code: CodePath):
    """
    Look up a scanned package.

    Also returns the statuses it may move to next.
    """
    package = PackageService.get_package(code)
    return PackageDetailResponse(
        package=package,
        next_statuses=allowed_next_statuses(package.get("status")),
    )


@router.post("/{code}/status", response_model=PackageResponse)
async def update_status(code: CodePath, request: StatusUpdateRequest):
    """
    Move a package to a new status.

    Returns 409 with code INVALID_TRANSITION when the move would go
    backwards or skip past a terminal state, and ALREADY_DELIVERED when a
    delivered package is scanned for delivery again.
    """
    return PackageService.update_status(
        code,
        request.status,
        weight=request.weight,
        packer_name=request.packer_name,
        shipping_location=request.shipping_location,
    )


@router.post("/{code}/assign", response_model=PackageResponse)
async def assign_worker(code: CodePath, request: AssignWorkerRequest):
    """Assign a package to a worker."""
    return PackageService.assign_worker(code, request.worker_name)


@router.delete("/{code}", response_model=DeleteResponse)
async def delete_package(
    code: CodePath,
    session: SessionContext = Depends(require_full_access),
):
    """Delete a package. Requires full access."""
    PackageService.delete_package(code)
    return DeleteResponse(deleted=1, message=f"Deleted package {code}")
