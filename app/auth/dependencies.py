# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Issues and verifies HS256 session tokens signed with SECRET_KEY, and
# exposes the resulting SessionContext through dependency injection.
#
# Usage:
#   from app.auth import get_session_context, require_full_access, SessionContext
#
#   @router.delete("/{code}")
#   async def delete(session: SessionContext = Depends(require_full_access)):
#       ...
# =============================================================================

import hmac
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError, ExpiredSignatureError

from app.config import settings
from app.auth.models import SessionContext, TokenPayload, TokenResponse
from app.exceptions import FullAccessRequiredError, InvalidPasswordError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
FULL_ACCESS_SCOPE = "full-access"
TOKEN_SUBJECT = "operator"

# HTTP Bearer token extractor; missing tokens mean an anonymous session
security_optional = HTTPBearer(auto_error=False)


def create_session_token(password: str, now: Optional[datetime] = None) -> TokenResponse:
    """
    Exchange the access password for a full-access session token.

    Raises:
        InvalidPasswordError: If the password is wrong
    """
    if not hmac.compare_digest(password.encode(), settings.ADMIN_PASSWORD.encode()):
        logger.warning("Rejected login attempt with incorrect password")
        raise InvalidPasswordError()

    issued_at = now or datetime.now(timezone.utc)
    expires_at = issued_at + timedelta(minutes=settings.SESSION_TTL_MINUTES)
    payload = {
        "sub": TOKEN_SUBJECT,
        "scope": FULL_ACCESS_SCOPE,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    token = jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)

    logger.info("Issued full-access session token")
    return TokenResponse(access_token=token, expires_at=expires_at)


def decode_session_token(token: str) -> SessionContext:
    """
    Verify a session token and build the SessionContext it grants.

    Raises:
        HTTPException: 401 if token is invalid or expired
    """
    try:
        payload = TokenPayload(**jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM]))

    except ExpiredSignatureError:
        logger.warning("Session token has expired")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        )

    except (JWTError, ValueError) as e:
        logger.warning(f"Session token validation failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token: {str(e)}",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return SessionContext(
        authenticated=True,
        full_access=payload.scope == FULL_ACCESS_SCOPE,
        issued_at=datetime.fromtimestamp(payload.iat, tz=timezone.utc),
        expires_at=datetime.fromtimestamp(payload.exp, tz=timezone.utc),
    )


async def get_session_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional)
) -> SessionContext:
    """
    Resolve the caller's session.

    Returns an anonymous context when no token is sent; an invalid or
    expired token is an error rather than silently anonymous.
    """
    if credentials is None:
        return SessionContext()
    return decode_session_token(credentials.credentials)


async def require_full_access(
    session: SessionContext = Depends(get_session_context)
) -> SessionContext:
    """
    Guard for administrative endpoints.

    Raises:
        FullAccessRequiredError: 403 if the session lacks full access
    """
    if not session.full_access:
        raise FullAccessRequiredError()
    return session
