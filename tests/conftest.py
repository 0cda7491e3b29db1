# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Points the package service at a throwaway local cache
# - Provides sample rows shaped like the Supabase tables
# =============================================================================

import os
from unittest.mock import patch

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-session-tokens")
os.environ.setdefault("ADMIN_PASSWORD", "test-password")

import pytest

from core.services.package_service import PackageService
from lib.local_cache import LocalPackageCache


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def local_cache(tmp_path):
    """Give every test its own empty package cache file."""
    cache = LocalPackageCache(tmp_path / "packages.json")
    with patch.object(PackageService, "_cache", return_value=cache):
        yield cache


@pytest.fixture
def pending_package():
    """A freshly generated package row."""
    return {
        "id": "pkg-1",
        "code": "25011500001",
        "description": "Mango jelly, 24 units",
        "status": "pending",
        "weight": "",
        "packer_name": "",
        "shipping_location": "",
        "created_at": "2025-01-15T08:00:00+00:00",
        "updated_at": "2025-01-15T08:00:00+00:00",
    }


@pytest.fixture
def worker_row():
    return {
        "id": "worker-1",
        "name": "Alice",
        "employee_id": "EMP-001",
        "department": "Packing",
        "position": "Packer",
        "is_packer": True,
        "is_cleaner": False,
        "created_at": "2025-01-01T08:00:00+00:00",
    }
