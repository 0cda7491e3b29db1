# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - packages.py: Package codes, scanner status updates and stats
# - workers.py: Worker registry and attendance
# - logbook.py: Hygiene photos and lab test reports
# - batch_counter.py: Production line batch counter readings
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import batch_counter
from . import health
from . import logbook
from . import packages
from . import workers

__all__ = [
    "batch_counter",
    "health",
    "logbook",
    "packages",
    "workers",
]
