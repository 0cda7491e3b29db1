# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for database operations
# - local_cache.py: JSON file cache used when Supabase is unreachable
# - utils.py: Shared utilities (time helpers, file extensions)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.local_cache import LocalPackageCache, LocalCacheError
from lib.utils import days_ago_iso, file_extension, utc_now, utc_now_iso

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Cache
    "LocalPackageCache",
    "LocalCacheError",
    # Utils
    "days_ago_iso",
    "file_extension",
    "utc_now",
    "utc_now_iso",
]
