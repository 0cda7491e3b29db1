# =============================================================================
# core/ - Domain Models, Lifecycle Rules and Services
# =============================================================================
# - models/: Pydantic schemas shared by the API and services
# - lifecycle.py: Package status transition guard
# - services/: Business logic over Supabase
# =============================================================================
