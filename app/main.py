# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the OpsTrack API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    OpsTrackException,
    opstrack_exception_handler,
    validation_exception_handler,
)
from app.routers import batch_counter, health, logbook, packages, workers
from app.auth import routes as auth_routes
from lib.supabase_client import SupabaseClientError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    The Supabase client is created lazily on first use, so startup only
    reports the effective configuration.
    """
    logger.info(f"Starting OpsTrack API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(f"Local package cache: {settings.LOCAL_CACHE_PATH}")

    yield

    logger.info("Shutting down OpsTrack API")


# Create FastAPI application
app = FastAPI(
    title="OpsTrack API",
    description="""
## Packing Floor Operations API

Tracks packages from QR code generation to delivery, and keeps the
daily records of the packing floor.

### Package Lifecycle

| From | Allowed next |
|------|--------------|
| **pending** | packed, dispatched, delivered |
| **packed** | dispatched, delivered |
| **dispatched** | delivered |
| **delivered** | (terminal) |

Rescanning a package for the status it already has is accepted, except
for delivery: a delivered package scanned for delivery again is rejected
with `ALREADY_DELIVERED`.

### Quick Start

```bash
# 1. Generate a package code
curl -X POST http://localhost:8000/api/v1/packages \\
  -H "Content-Type: application/json" -d '{}'

# 2. Pack it
curl -X POST http://localhost:8000/api/v1/packages/{code}/status \\
  -H "Content-Type: application/json" \\
  -d '{"status": "packed", "weight": "2.5kg", "packer_name": "Alice"}'

# 3. Unlock full access for admin pages
curl -X POST http://localhost:8000/api/v1/auth/login \\
  -H "Content-Type: application/json" -d '{"password": "..."}'
```
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Unlock a full-access session with the access password",
        },
        {
            "name": "Packages",
            "description": "Package codes, scanner status updates and dashboard stats",
        },
        {
            "name": "Workers",
            "description": "Worker registry",
        },
        {
            "name": "Attendance",
            "description": "Daily worker attendance",
        },
        {
            "name": "Hygiene",
            "description": "Daily hygiene photos per area",
        },
        {
            "name": "Lab Tests",
            "description": "Monthly lab test reports",
        },
        {
            "name": "Batch Counter",
            "description": "Production line batch counter readings",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(OpsTrackException)
async def handle_opstrack_exception(request: Request, exc: OpsTrackException):
    """Handle custom OpsTrack exceptions."""
    return await opstrack_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    return await validation_exception_handler(request, exc)


@app.exception_handler(SupabaseClientError)
async def handle_supabase_exception(request: Request, exc: SupabaseClientError):
    """Storage backend failures that no service could recover from."""
    logger.error(f"Supabase error on {request.url.path}: {exc}")
    content = {"detail": exc.message, "code": exc.code}
    if exc.suggestion:
        content["suggestion"] = exc.suggestion
    return JSONResponse(status_code=503, content=content)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix="/api/v1/auth",
    tags=["Auth"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Package tracking endpoints
app.include_router(
    packages.router,
    prefix="/api/v1/packages",
    tags=["Packages"]
)

# Worker registry endpoints
app.include_router(
    workers.router,
    prefix="/api/v1/workers",
    tags=["Workers"]
)

# Attendance endpoints
app.include_router(
    workers.attendance_router,
    prefix="/api/v1/attendance",
    tags=["Attendance"]
)

# Hygiene photo endpoints
app.include_router(
    logbook.hygiene_router,
    prefix="/api/v1/hygiene",
    tags=["Hygiene"]
)

# Lab test report endpoints
app.include_router(
    logbook.lab_tests_router,
    prefix="/api/v1/lab-tests",
    tags=["Lab Tests"]
)

# Batch counter endpoints
app.include_router(
    batch_counter.router,
    prefix="/api/v1/batch-counter",
    tags=["Batch Counter"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "OpsTrack API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
