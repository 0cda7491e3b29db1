# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - package.py: Package lifecycle schemas and dashboard stats
# - worker.py: Worker and attendance schemas
# - logbook.py: Hygiene photo and lab test schemas
# - batch_counter.py: Batch counter machine readings
#
# These models define the "contract" between API and clients.
# =============================================================================

from .package import (
    AssignWorkerRequest,
    BulkPackageCreate,
    DailyStatusCount,
    DeletePackagesRequest,
    PackageCreate,
    PackageList,
    PackageResponse,
    PackageStats,
    PackingStatus,
    StatusUpdateRequest,
)

from .worker import (
    AttendanceResponse,
    AttendanceStatus,
    AttendanceUpdate,
    AttendanceUpsert,
    Overtime,
    WorkerCreate,
    WorkerResponse,
    WorkerUpdate,
)

from .logbook import (
    HYGIENE_AREA_LABELS,
    LAB_TEST_CATALOG,
    HygieneArea,
    HygieneAreaStatus,
    HygieneChecklist,
    HygieneRecordResponse,
    LabTestCategory,
    LabTestCategoryStatus,
    LabTestChecklist,
    LabTestRecordResponse,
    LabTestType,
)

from .batch_counter import (
    BatchCounterStats,
    BatchReadingCreate,
    BatchReadingResponse,
)

__all__ = [
    # Package
    "AssignWorkerRequest",
    "BulkPackageCreate",
    "DailyStatusCount",
    "DeletePackagesRequest",
    "PackageCreate",
    "PackageList",
    "PackageResponse",
    "PackageStats",
    "PackingStatus",
    "StatusUpdateRequest",
    # Worker / Attendance
    "AttendanceResponse",
    "AttendanceStatus",
    "AttendanceUpdate",
    "AttendanceUpsert",
    "Overtime",
    "WorkerCreate",
    "WorkerResponse",
    "WorkerUpdate",
    # Hygiene / Lab tests
    "HYGIENE_AREA_LABELS",
    "LAB_TEST_CATALOG",
    "HygieneArea",
    "HygieneAreaStatus",
    "HygieneChecklist",
    "HygieneRecordResponse",
    "LabTestCategory",
    "LabTestCategoryStatus",
    "LabTestChecklist",
    "LabTestRecordResponse",
    "LabTestType",
    # Batch counter
    "BatchCounterStats",
    "BatchReadingCreate",
    "BatchReadingResponse",
]
