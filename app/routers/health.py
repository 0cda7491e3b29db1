# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Liveness and readiness probes. Readiness reports the Supabase table,
# the storage buckets and the local package cache separately, because
# scanning keeps working on the cache alone when Supabase is down.
# =============================================================================

import os
from pathlib import Path

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from lib.supabase_client import SupabaseClient
from lib.utils import utc_now_iso

router = APIRouter()

API_VERSION = "1.0.0"
HEALTHY = "healthy"


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    environment: str
    version: str


class ReadinessChecks(BaseModel):
    """Per-dependency probe results; anything but "healthy" is an error string."""
    database: str = "unknown"
    storage: str = "unknown"
    local_cache: str = "unknown"


class ReadinessResponse(BaseModel):
    status: str
    checks: ReadinessChecks
    timestamp: str


def _probe_database() -> str:
    try:
        SupabaseClient.get_client().table(settings.PACKAGES_TABLE).select("id").limit(1).execute()
        return HEALTHY
    except Exception as e:
        return f"unhealthy: {str(e)[:50]}"


def _probe_storage() -> str:
    try:
        names = {b.name for b in SupabaseClient.get_client().storage.list_buckets()}
    except Exception as e:
        return f"unhealthy: {str(e)[:50]}"

    missing = sorted({settings.HYGIENE_BUCKET, settings.LAB_TESTS_BUCKET} - names)
    if missing:
        return f"missing buckets: {', '.join(missing)}"
    return HEALTHY


def _probe_local_cache() -> str:
    """The cache directory must exist or be creatable, and be writable."""
    directory = Path(settings.LOCAL_CACHE_PATH).resolve().parent
    while not directory.exists():
        directory = directory.parent
    if not os.access(directory, os.W_OK):
        return f"not writable: {directory}"
    return HEALTHY


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status=HEALTHY,
        timestamp=utc_now_iso(),
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Readiness check endpoint.

    Status is "ready" when every probe passes, "degraded" when only the
    local cache is usable (scanning still works), and "unavailable"
    otherwise.
    """
    checks = ReadinessChecks(
        database=_probe_database(),
        storage=_probe_storage(),
        local_cache=_probe_local_cache(),
    )

    if all(value == HEALTHY for value in checks.model_dump().values()):
        status = "ready"
    elif checks.local_cache == HEALTHY:
        status = "degraded"
    else:
        status = "unavailable"

    return ReadinessResponse(status=status, checks=checks, timestamp=utc_now_iso())


@router.get("/health/live")
async def liveness_check():
    """Whether the process is alive. Used for restart decisions."""
    return {"status": "alive", "timestamp": utc_now_iso()}
