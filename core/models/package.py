# =============================================================================
# core/models/package.py - Package Schemas
# =============================================================================
# These models define the API contract for package (QR code) tracking:
# - PackingStatus: Enum for the package lifecycle
# - PackageCreate / BulkPackageCreate: Input for generating packages
# - StatusUpdateRequest: Input for a scan that moves a package forward
# - PackageResponse / PackageList: Output returned to clients
# - PackageStats: Dashboard aggregates
#
# A package is identified by its scannable `code` and moves through
# pending -> packed -> dispatched -> delivered.
# =============================================================================

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PackingStatus(str, Enum):
    """
    Lifecycle states of a package.

    - pending: Code generated, nothing packed yet
    - packed: Weighed and packed by a packer
    - dispatched: Left the facility for a shipping location
    - delivered: Terminal state

    Flow: pending -> packed -> dispatched -> delivered
    (packed -> delivered is also accepted)
    """
    PENDING = "pending"
    PACKED = "packed"
    DISPATCHED = "dispatched"
    DELIVERED = "delivered"


class PackageCreate(BaseModel):
    """
    Schema for creating a package.

    When `code` is omitted, the service generates the next code for today.

    Example:
        {
            "description": "Mango jelly, 24 units"
        }
    """

    code: str | None = Field(
        default=None,
        min_length=1,
        max_length=64,
        description="Explicit package code (generated when omitted)"
    )

    description: str = Field(
        default="",
        max_length=500,
        description="Free-text description printed under the QR code"
    )

    assigned_worker: str | None = Field(
        default=None,
        description="Worker the package is assigned to"
    )


class BulkPackageCreate(BaseModel):
    """Schema for generating several packages at once."""

    count: int = Field(
        ...,
        ge=1,
        le=500,
        description="Number of packages to generate"
    )

    description: str = Field(
        default="",
        max_length=500,
        description="Description shared by all generated packages"
    )


class StatusUpdateRequest(BaseModel):
    """
    Schema for a status change, usually sent by a scanner.

    `weight` and `packer_name` are meaningful when packing;
    `shipping_location` when dispatching. An empty `shipping_location`
    clears the stored value; omitting it leaves the value unchanged.

    Example:
        {
            "status": "packed",
            "weight": "1.5kg",
            "packer_name": "J. Smith"
        }
    """

    status: PackingStatus = Field(
        ...,
        description="Requested status"
    )

    weight: str | None = Field(
        default=None,
        max_length=50,
        description="Package weight (set when packing)"
    )

    packer_name: str | None = Field(
        default=None,
        max_length=255,
        description="Name of the packer (set when packing)"
    )

    shipping_location: str | None = Field(
        default=None,
        max_length=255,
        description="Destination (set when dispatching)"
    )


class AssignWorkerRequest(BaseModel):
    """Schema for assigning a package to a worker."""

    worker_name: str = Field(..., min_length=1, max_length=255)


class DeletePackagesRequest(BaseModel):
    """Schema for deleting several packages by code."""

    codes: list[str] = Field(..., min_length=1)


class PackageResponse(BaseModel):
    """
    Schema for returning a package to clients.

    Unknown status strings coming from the store are passed through
    unchanged, so `status` is typed as a plain string.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str | None = None
    code: str
    description: str = ""
    status: str = PackingStatus.PENDING.value
    weight: str | None = None
    packer_name: str | None = None
    assigned_worker: str | None = None
    shipping_location: str | None = None
    packed_at: datetime | None = None
    shipped_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PackageList(BaseModel):
    """Schema for listing packages."""

    packages: list[PackageResponse] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)


class DailyStatusCount(BaseModel):
    """Package counts for one day, by status."""

    date: str
    pending: int = 0
    packed: int = 0
    dispatched: int = 0
    delivered: int = 0


class PackageStats(BaseModel):
    """
    Dashboard aggregates over a set of packages.

    Example:
        {
            "total": 12,
            "by_status": {"pending": 4, "packed": 5, "dispatched": 2, "delivered": 1},
            "by_day": [{"date": "2025-01-15", "pending": 4, ...}],
            "by_packer": {"J. Smith": 5}
        }
    """

    total: int = 0
    by_status: dict[str, int] = Field(default_factory=dict)
    by_day: list[DailyStatusCount] = Field(default_factory=list)
    by_packer: dict[str, int] = Field(default_factory=dict)
