# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Password login and session inspection.
# =============================================================================

import logging

from fastapi import APIRouter, Depends

from app.auth.dependencies import create_session_token, get_session_context
from app.auth.models import LoginRequest, SessionContext, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest) -> TokenResponse:
    """
    Exchange the access password for a bearer token.

    Send the token as `Authorization: Bearer <token>` to reach
    administrative endpoints.

    Raises:
        401: If the password is wrong
    """
    return create_session_token(request.password)


@router.get("/session", response_model=SessionContext)
async def current_session(
    session: SessionContext = Depends(get_session_context)
) -> SessionContext:
    """
    Describe the current session.

    Anonymous callers get `authenticated: false`. Logging out is a client
    action: drop the token.
    """
    return session
