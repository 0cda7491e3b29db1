# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .package_service import PackageService, build_status_update
from .package_stats import compute_package_stats
from .worker_service import WorkerService, AttendanceService
from .storage_service import StorageService
from .logbook_service import HygieneService, LabTestService
from .batch_counter_service import BatchCounterService

__all__ = [
    "PackageService",
    "build_status_update",
    "compute_package_stats",
    "WorkerService",
    "AttendanceService",
    "StorageService",
    "HygieneService",
    "LabTestService",
    "BatchCounterService",
]
