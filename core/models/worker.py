# =============================================================================
# core/models/worker.py - Worker and Attendance Schemas
# =============================================================================
# Workers are the people who pack, clean and sign attendance.
# Attendance is one record per worker per day.
# =============================================================================

from datetime import date as Date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class AttendanceStatus(str, Enum):
    """Daily attendance states."""
    PRESENT = "present"
    ABSENT = "absent"
    HALF_DAY = "half_day"


class Overtime(str, Enum):
    """Whether a worker stayed past the shift."""
    YES = "yes"
    NO = "no"


# =============================================================================
# Workers
# =============================================================================

class WorkerCreate(BaseModel):
    """
    Schema for registering a worker.

    Example:
        {
            "name": "J. Smith",
            "employee_id": "EMP-014",
            "is_packer": true
        }
    """

    name: str = Field(..., min_length=1, max_length=255)
    employee_id: str = Field(..., min_length=1, max_length=64)
    department: str = Field(default="", max_length=255)
    position: str = Field(default="", max_length=255)
    is_packer: bool = False
    is_cleaner: bool = False


class WorkerUpdate(BaseModel):
    """Partial update for a worker. Omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    employee_id: str | None = Field(default=None, min_length=1, max_length=64)
    department: str | None = Field(default=None, max_length=255)
    position: str | None = Field(default=None, max_length=255)
    is_packer: bool | None = None
    is_cleaner: bool | None = None


class WorkerResponse(BaseModel):
    """Worker as returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    employee_id: str
    department: str | None = ""
    position: str | None = ""
    is_packer: bool = False
    is_cleaner: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


# =============================================================================
# Attendance
# =============================================================================

class AttendanceUpsert(BaseModel):
    """
    Schema for recording attendance.

    Posting twice for the same worker and date replaces the first record.

    Example:
        {
            "worker_id": "3f0c...",
            "date": "2025-01-15",
            "status": "present",
            "overtime": "no"
        }
    """

    worker_id: str = Field(..., min_length=1)
    worker_name: str | None = Field(
        default=None,
        description="Display name; looked up from the worker when omitted"
    )
    date: Date
    status: AttendanceStatus
    overtime: Overtime = Overtime.NO
    notes: str = Field(default="", max_length=1000)


class AttendanceUpdate(BaseModel):
    """Update of an existing attendance record."""

    status: AttendanceStatus
    overtime: Overtime = Overtime.NO
    notes: str = Field(default="", max_length=1000)


class AttendanceResponse(BaseModel):
    """Attendance record as returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    worker_id: str
    worker_name: str
    date: Date
    status: str
    overtime: str | None = ""
    notes: str | None = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
