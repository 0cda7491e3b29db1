# =============================================================================
# tests/test_auth.py - Session Token Tests
# =============================================================================

from datetime import timedelta

import pytest
from fastapi import HTTPException
from jose import jwt

from app.auth import create_session_token, decode_session_token
from app.config import settings
from app.exceptions import InvalidPasswordError
from lib.utils import utc_now


class TestSessionTokens:

    def test_wrong_password_is_rejected(self):
        with pytest.raises(InvalidPasswordError):
            create_session_token("not-the-password")

    def test_token_grants_full_access(self):
        token = create_session_token(settings.ADMIN_PASSWORD)

        session = decode_session_token(token.access_token)

        assert token.token_type == "bearer"
        assert session.authenticated is True
        assert session.full_access is True
        assert session.expires_at > session.issued_at

    def test_expired_token(self):
        issued = utc_now() - timedelta(minutes=settings.SESSION_TTL_MINUTES + 5)
        token = create_session_token(settings.ADMIN_PASSWORD, now=issued)

        with pytest.raises(HTTPException) as exc_info:
            decode_session_token(token.access_token)

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Token has expired"

    def test_token_signed_with_other_key(self):
        now = int(utc_now().timestamp())
        forged = jwt.encode(
            {"sub": "operator", "scope": "full-access", "iat": now, "exp": now + 60},
            "some-other-secret-key",
            algorithm="HS256",
        )

        with pytest.raises(HTTPException) as exc_info:
            decode_session_token(forged)
        assert exc_info.value.status_code == 401

    def test_other_scope_is_not_full_access(self):
        now = int(utc_now().timestamp())
        token = jwt.encode(
            {"sub": "operator", "scope": "read-only", "iat": now, "exp": now + 60},
            settings.SECRET_KEY,
            algorithm="HS256",
        )

        session = decode_session_token(token)

        assert session.authenticated is True
        assert session.full_access is False
