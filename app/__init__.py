# =============================================================================
# app/ - OpsTrack HTTP Layer
# =============================================================================
# - main.py: FastAPI app, middleware, exception handlers, router mounting
# - config.py: Settings loaded from the environment / .env
# - exceptions.py: Error hierarchy rendered as JSON
# - auth/: Password-unlocked session tokens and the SessionContext dependency
# - routers/: Endpoints per feature (packages, workers, logbook, ...)
#
# Routers stay thin and hand work to core/services.
# =============================================================================
