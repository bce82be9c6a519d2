"""Authentication API endpoints."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import get_settings
from ..core.errors import clear_session_cookie
from ..core.schemas.auth import SigninRequest, SignupRequest, UserEnvelope
from ..core.schemas.common import SuccessResponse, error_responses
from ..core.services import AuthService
from ..database import get_db_session
from ..middleware.auth import CurrentUser, get_current_user

router = APIRouter(
    prefix="/auth",
    tags=["authentication"],
    responses=error_responses(400, 401, 409, 500),
)


@router.post("/signup", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
async def signup(request: SignupRequest, session: AsyncSession = Depends(get_db_session)):
    """Register a new user."""
    auth_service = AuthService(session)
    user = await auth_service.signup(request)
    return UserEnvelope(message="User registered successfully", user=user)


@router.post("/signin", response_model=UserEnvelope)
async def signin(
    request: SigninRequest,
    response: Response,
    session: AsyncSession = Depends(get_db_session),
):
    """Sign in and receive the session cookie."""
    auth_service = AuthService(session)
    result = await auth_service.signin(request)

    settings = get_settings()
    response.set_cookie(
        key=settings.session_cookie_name,
        value=result.token,
        max_age=result.expires_in,
        path="/",
        domain=settings.cookie_domain,
        secure=settings.cookie_secure,
        httponly=True,
        samesite=settings.cookie_samesite,
    )
    return UserEnvelope(message="Signed in successfully", user=result.user)


@router.post("/signout", response_model=SuccessResponse)
async def signout(response: Response):
    """Clear the session cookie."""
    clear_session_cookie(response)
    return SuccessResponse(message="Signed out successfully")


@router.get("/me", response_model=UserEnvelope, response_model_exclude_none=True)
async def me(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Get current user profile."""
    auth_service = AuthService(session)
    user = await auth_service.get_current_user(current_user.id)
    return UserEnvelope(user=user)
