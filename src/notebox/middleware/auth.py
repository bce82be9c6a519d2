"""Authentication middleware.

Resolves the session cookie into the calling user. Route handlers depend
on ``get_current_user`` (or ``get_current_user_id``) and never read the
owner from request bodies.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import get_settings
from ..core.errors import Unauthenticated
from ..core.logging import get_logger
from ..core.repositories.user_repository import UserRepository
from ..database import get_db_session
from ..security import TokenError, TokenExpired, get_user_id_from_token

logger = get_logger("auth")


@dataclass(frozen=True)
class CurrentUser:
    """Identity attached to an authenticated request."""

    id: UUID
    username: str
    email: str


def get_session_token(request: Request) -> Optional[str]:
    """Read the raw session token from the request cookie."""
    token = request.cookies.get(get_settings().session_cookie_name)
    return token or None


async def get_current_user(
    request: Request, session: AsyncSession = Depends(get_db_session)
) -> CurrentUser:
    """Authenticate the request from its session cookie."""
    token = get_session_token(request)
    if token is None:
        raise Unauthenticated("Not authenticated")

    try:
        user_id = get_user_id_from_token(token)
    except TokenExpired:
        raise Unauthenticated("Session expired", clear_session=True)
    except TokenError:
        logger.info("Rejected invalid session token", extra={"path": request.url.path})
        raise Unauthenticated("Invalid session", clear_session=True)

    user = await UserRepository(session).get_by_id(user_id)
    if user is None:
        raise Unauthenticated("User no longer exists", clear_session=True)

    request.state.user_id = str(user.id)
    return CurrentUser(id=user.id, username=user.username, email=user.email)


async def get_current_user_id(user: CurrentUser = Depends(get_current_user)) -> UUID:
    """Get current authenticated user ID."""
    return user.id
