"""Authentication API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rental_admin.config.logger import app_logger
from rental_admin.config.settings import Settings
from rental_admin.db import crud
from rental_admin.db.db import get_session
from rental_admin.models import User
from rental_admin.utils.auth import get_settings, RequireAuth
from rental_admin.utils.errors import AppError, AuthenticationError, InternalError, ValidationError
from rental_admin.utils.passwords import verify_password
from rental_admin.utils.responses import ERROR_RESPONSES
from rental_admin.utils.tokens import create_access_token
from rental_admin.api.auth.schemas import (
    LoginRequest,
    LoginResponse,
    UserResponse,
    VerifyResponse,
)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse, responses=ERROR_RESPONSES)
async def login(
    request: LoginRequest,
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """Authenticate a user and return an access token.

    Unknown usernames and wrong passwords get the same 401 response.
    """
    if not request.username or not request.password:
        raise ValidationError("Username and password are required")

    try:
        user = await crud.get_user_by_username(session, request.username)

        if not user or not verify_password(request.password, user.password_hash):
            app_logger.warning(f"Failed login attempt for username: {request.username}")
            raise AuthenticationError("Invalid credentials")

        token = create_access_token(
            user,
            secret=settings.JWT_SECRET,
            expires_in=settings.TOKEN_EXP_SECONDS,
            algorithm=settings.JWT_ALGORITHM,
        )

        app_logger.info(f"User logged in: {user.username} (ID: {user.id})")

        return LoginResponse(
            token=token,
            token_type="bearer",
            expires_in=settings.TOKEN_EXP_SECONDS,
            user=UserResponse.model_validate(user),
        )

    except AppError:
        raise
    except Exception as e:
        app_logger.error(f"Login failed: {e}")
        raise InternalError() from e


@router.get("/verify", response_model=VerifyResponse, responses=ERROR_RESPONSES)
async def verify(user: User = RequireAuth):
    """Return the user the bearer token belongs to."""
    return VerifyResponse(user=UserResponse.model_validate(user))
