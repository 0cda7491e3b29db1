# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Password-unlocked sessions carried as signed bearer tokens.
#
# Usage:
#   from app.auth import require_full_access, SessionContext
#
#   @router.get("/protected")
#   async def protected(session: SessionContext = Depends(require_full_access)):
#       return {"full_access": session.full_access}
# =============================================================================

from app.auth.dependencies import (
    create_session_token,
    decode_session_token,
    get_session_context,
    require_full_access,
)
from app.auth.models import LoginRequest, SessionContext, TokenResponse

__all__ = [
    "create_session_token",
    "decode_session_token",
    "get_session_context",
    "require_full_access",
    "LoginRequest",
    "SessionContext",
    "TokenResponse",
]
