# =============================================================================
# core/models/batch_counter.py - Batch Counter Schemas
# =============================================================================
# Readings pushed by batch counter machines on the production line.
# =============================================================================

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BatchReadingCreate(BaseModel):
    """
    A reading sent by a machine.

    Example:
        {
            "machine_id": "line-1",
            "batch_count": 1520,
            "production_rate": 42.5
        }
    """

    machine_id: str = Field(..., min_length=1, max_length=100)
    batch_count: int = Field(..., ge=0)
    production_rate: float | None = None
    status: str = Field(default="running", max_length=50)
    metadata: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime | None = Field(
        default=None,
        description="Reading time; defaults to the time of receipt"
    )


class BatchReadingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str | None = None
    machine_id: str
    batch_count: int
    production_rate: float | None = None
    status: str = "running"
    metadata: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime
    created_at: datetime | None = None


class BatchCounterStats(BaseModel):
    """Per-machine aggregate over the last hour."""

    machine_id: str
    total_readings: int
    max_count: int
    min_count: int
    avg_production_rate: float | None = None
    last_update: datetime | None = None
