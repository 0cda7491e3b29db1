# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for the session context and login exchange.
# =============================================================================

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SessionContext(BaseModel):
    """
    Who is calling and what they may do.

    Built per request from the bearer token and handed to the routes that
    need it; anonymous callers get `authenticated=False`.
    """
    model_config = ConfigDict(frozen=True)

    authenticated: bool = False
    full_access: bool = False
    issued_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None


class LoginRequest(BaseModel):
    """Password login."""
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Issued session token."""
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    full_access: bool = True


class TokenPayload(BaseModel):
    """
    Decoded session token payload.

    Standard JWT claims plus the access level.
    """
    sub: str
    scope: str
    exp: int
    iat: int
