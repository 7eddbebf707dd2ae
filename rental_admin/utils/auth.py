"""Authentication utilities and dependency injection."""

from typing import Optional

from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from rental_admin.config.settings import Settings
from rental_admin.db import crud
from rental_admin.db.db import get_session
from rental_admin.models import ADMIN_ROLE, User
from rental_admin.utils.errors import AuthenticationError, AuthorizationError
from rental_admin.utils.tokens import verify_access_token

# HTTP Bearer token security scheme
security_scheme = HTTPBearer(
    scheme_name="Bearer",
    description="Bearer token authentication",
    auto_error=False,  # Missing/malformed headers are reported as AuthenticationError
)


def get_settings(request: Request) -> Settings:
    """Return the settings the running application was built with."""
    return request.app.state.settings


async def get_auth_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security_scheme),
) -> str:
    """Extract the Bearer token from the Authorization header.

    Raises:
        AuthenticationError: If the header is absent, not a Bearer header, or empty
    """
    if not credentials or not credentials.credentials.strip():
        raise AuthenticationError("No token provided")

    return credentials.credentials.strip()


async def authenticate(
    token: str = Depends(get_auth_token),
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> User:
    """Resolve the bearer token to a stored user.

    The user is re-read from the database so that a deleted account or a
    changed role takes effect even while an older token is still valid.

    Raises:
        AuthenticationError: If the token is invalid/expired or the user no longer exists
    """
    claims = verify_access_token(token, settings.JWT_SECRET, settings.JWT_ALGORITHM)
    if claims is None:
        raise AuthenticationError("Invalid token")

    user = await crud.get_user_by_id(session, claims.user_id)
    if user is None:
        raise AuthenticationError("Invalid token")

    return user


def authorize(user: Optional[User], required_role: str) -> bool:
    """Return True when the user exists and holds exactly the required role."""
    return user is not None and user.role == required_role


def require_role(role: str, denied_status_setting: Optional[str] = None):
    """Build a dependency that only admits users with ``role``.

    Args:
        role: Required role
        denied_status_setting: Name of the Settings field holding the HTTP
            status used when the role does not match (403 when omitted)
    """

    async def dependency(
        user: User = Depends(authenticate),
        settings: Settings = Depends(get_settings),
    ) -> User:
        if not authorize(user, role):
            status_code = getattr(settings, denied_status_setting) if denied_status_setting else None
            raise AuthorizationError("Unauthorized", status_code=status_code)
        return user

    return dependency


async def require_audit_reader(
    user: User = Depends(authenticate),
    settings: Settings = Depends(get_settings),
) -> User:
    """Admit any authenticated user, or only admins when AUDIT_REQUIRES_ADMIN is set."""
    if settings.AUDIT_REQUIRES_ADMIN and not authorize(user, ADMIN_ROLE):
        raise AuthorizationError("Unauthorized")
    return user


# Convenience aliases for cleaner imports
RequireAuth = Depends(authenticate)
RequireListingEditor = Depends(require_role(ADMIN_ROLE, "LISTING_EDIT_DENIED_STATUS"))
RequireStatusModerator = Depends(require_role(ADMIN_ROLE, "LISTING_STATUS_DENIED_STATUS"))
RequireAuditReader = Depends(require_audit_reader)
