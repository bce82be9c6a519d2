"""Authentication service implementation."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ...security import (
    create_session_token,
    dummy_verify,
    hash_password,
    needs_update,
    verify_password,
)
from ..errors import DuplicateEmail, Unauthenticated
from ..logging import get_logger
from ..repositories.user_repository import UserRepository
from ..schemas.auth import SessionResult, SigninRequest, SignupRequest, UserResponse
from .interfaces import IAuthService

logger = get_logger("auth")

INVALID_CREDENTIALS = "Invalid email or password"


class AuthService(IAuthService):
    """Authentication service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)
        self.settings = get_settings()

    async def signup(self, request: SignupRequest) -> UserResponse:
        """Register new user."""
        if await self.user_repo.is_email_taken(request.email):
            raise DuplicateEmail()

        user = await self.user_repo.create_user(
            {
                "username": request.username,
                "email": request.email,
                "password_hash": hash_password(request.password),
            }
        )
        logger.info("User registered", extra={"user_id": str(user.id)})
        return UserResponse.model_validate(user)

    async def signin(self, request: SigninRequest) -> SessionResult:
        """Verify credentials and issue a session token."""
        user = await self.user_repo.get_by_email(request.email)
        if user is None:
            dummy_verify(request.password)
            logger.info("Sign-in failed: unknown email")
            raise Unauthenticated(INVALID_CREDENTIALS)

        if not verify_password(request.password, user.password_hash):
            logger.info("Sign-in failed: wrong password", extra={"user_id": str(user.id)})
            raise Unauthenticated(INVALID_CREDENTIALS)

        # Hash parameters changed since this password was stored
        if needs_update(user.password_hash):
            user = await self.user_repo.update_password_hash(user, hash_password(request.password))
            logger.info("Password hash upgraded", extra={"user_id": str(user.id)})

        token =create_session_token(user.id)
        logger.info("User signed in", extra={"user_id": str(user.id)})
        return SessionResult(
            user=UserResponse.model_validate(user),
            token=token,
            expires_in=self.settings.session_expire_minutes * 60,
        )

    async def get_current_user(self, user_id: UUID) -> UserResponse:
        """Get user by ID."""
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise Unauthenticated("User no longer exists", clear_session=True)
        return UserResponse.model_validate(user)
