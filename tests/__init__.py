# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the OpsTrack API:
# - test_lifecycle.py: Status transition guard
# - test_package_service.py: Package updates, code generation, cache fallback
# - test_models.py: Pydantic model validation
# - test_api.py: HTTP endpoints through TestClient
#
# Run tests with: pytest
# =============================================================================
