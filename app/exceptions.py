# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error carries a machine-readable code and, where possible, a hint
# on how to fix it.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class OpsTrackException(Exception):
    """
    Base exception for the OpsTrack API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "OPSTRACK_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Package Exceptions
# =============================================================================

class PackageNotFoundError(OpsTrackException):
    """Raised when no package exists for a scanned code."""

    def __init__(self, code: str):
        super().__init__(
            message=f"Package not found: {code}",
            code="PACKAGE_NOT_FOUND",
            status_code=404,
            suggestion="Check that the QR code was generated by this system",
            details={"code": code}
        )


class InvalidTransitionError(OpsTrackException):
    """
    Raised when a status change is rejected.

    Keeps both statuses so clients can show which step was skipped or reversed.
    """

    def __init__(
        self,
        current_status: str | None,
        requested_status: str,
        message: str | None = None,
        code: str = "INVALID_TRANSITION",
        suggestion: str | None = "Packages move forward only: pending → packed → dispatched → delivered",
        details: dict[str, Any] | None = None,
    ):
        self.current_status = current_status
        self.requested_status = requested_status
        super().__init__(
            message=message or f"Invalid status transition: {current_status} → {requested_status}",
            code=code,
            status_code=409,
            suggestion=suggestion,
            details={
                "current_status": current_status,
                "requested_status": requested_status,
                **(details or {}),
            }
        )


class AlreadyDeliveredError(InvalidTransitionError):
    """
    Raised when a delivered package is scanned for delivery again.

    A rejected transition with its own code, so scanners can tell the
    operator the package was already handled.
    """

    def __init__(self, code: str):
        super().__init__(
            "delivered",
            "delivered",
            message=f"Package already marked as delivered: {code}",
            code="ALREADY_DELIVERED",
            suggestion=None,
            details={"code": code},
        )


class PackageCodeConflictError(OpsTrackException):
    """Raised when a package is created with a code that already exists."""

    def __init__(self, code: str):
        super().__init__(
            message=f"Package code already exists: {code}",
            code="PACKAGE_CODE_CONFLICT",
            status_code=409,
            suggestion="Request a fresh code from GET /packages/next-code",
            details={"code": code}
        )


# =============================================================================
# Worker / Attendance Exceptions
# =============================================================================

class WorkerNotFoundError(OpsTrackException):
    """Raised when a worker ID doesn't exist."""

    def __init__(self, worker_id: str):
        super().__init__(
            message=f"Worker not found: {worker_id}",
            code="WORKER_NOT_FOUND",
            status_code=404,
            suggestion="Check that the worker_id is correct and the worker hasn't been removed",
            details={"worker_id": worker_id}
        )


class AttendanceNotFoundError(OpsTrackException):
    """Raised when an attendance record ID doesn't exist."""

    def __init__(self, attendance_id: str):
        super().__init__(
            message=f"Attendance record not found: {attendance_id}",
            code="ATTENDANCE_NOT_FOUND",
            status_code=404,
            details={"attendance_id": attendance_id}
        )


class LabTestNotFoundError(OpsTrackException):
    """Raised when a lab test record ID doesn't exist."""

    def __init__(self, record_id: str):
        super().__init__(
            message=f"Lab test record not found: {record_id}",
            code="LAB_TEST_NOT_FOUND",
            status_code=404,
            details={"record_id": record_id}
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class InvalidFileTypeError(OpsTrackException):
    """Raised when uploaded file type is not allowed."""

    def __init__(self, filename: str, allowed: list[str]):
        super().__init__(
            message=f"Invalid file type: {filename}",
            code="INVALID_FILE_TYPE",
            status_code=400,
            suggestion=f"Only these file types are supported: {', '.join(allowed)}",
            details={"filename": filename, "allowed_types": allowed}
        )


class FileTooLargeError(OpsTrackException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload a file smaller than {max_mb}MB",
            details={"size_mb": size_mb, "max_mb": max_mb}
        )


class StorageUploadError(OpsTrackException):
    """Raised when file upload to storage fails."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Failed to upload file to storage: {error}",
            code="STORAGE_UPLOAD_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"error": error}
        )


# =============================================================================
# Auth Exceptions
# =============================================================================

class InvalidPasswordError(OpsTrackException):
    """Raised when a login attempt uses the wrong password."""

    def __init__(self):
        super().__init__(
            message="Incorrect password",
            code="INVALID_PASSWORD",
            status_code=401,
            suggestion="Ask an administrator for the current access password",
        )


class FullAccessRequiredError(OpsTrackException):
    """Raised when an administrative endpoint is called without full access."""

    def __init__(self):
        super().__init__(
            message="This feature requires password authentication",
            code="FULL_ACCESS_REQUIRED",
            status_code=403,
            suggestion="Log in with POST /api/v1/auth/login and send the returned bearer token",
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def opstrack_exception_handler(
    request: Request,
    exc: OpsTrackException
) -> JSONResponse:
    """
    Convert OpsTrackException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Converts validation errors to user-friendly messages.
    """
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": str(exc)
        }
    )
