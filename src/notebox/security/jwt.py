"""Signed session tokens.

Tokens are stateless: there is no server-side revocation list, so a token
stays valid until ``exp`` even after the cookie carrying it was cleared.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt

from ..config import get_settings

SESSION_TOKEN_TYPE = "session"


class TokenError(Exception):
    """Session token could not be trusted."""


class TokenExpired(TokenError):
    pass


def create_session_token(user_id: UUID, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed session token for a user."""
    settings = get_settings()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.session_expire_minutes))
    claims = {
        "sub": str(user_id),
        "type": SESSION_TOKEN_TYPE,
        "iat": int(now.timestamp()),
        "exp": expire,
    }
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def decode_session_token(token: str) -> Dict[str, Any]:
    """Verify signature, expiry and token type; return the claims.

    Raises TokenExpired or TokenError.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except ExpiredSignatureError as e:
        raise TokenExpired("Session expired") from e
    except JWTError as e:
        raise TokenError("Invalid session token") from e

    if payload.get("type") != SESSION_TOKEN_TYPE:
        raise TokenError("Invalid session token")
    if "exp" not in payload:
        raise TokenError("Invalid session token")
    return payload


def get_user_id_from_token(token: str) -> UUID:
    """Extract the user id from a verified session token."""
    payload = decode_session_token(token)
    subject = payload.get("sub")
    if not subject:
        raise TokenError("Invalid session token")
    try:
        return UUID(subject)
    except ValueError as e:
        raise TokenError("Invalid session token") from e
