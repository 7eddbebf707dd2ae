"""JWT session token helpers.

Tokens are stateless: validity depends only on the signature and the
``exp`` claim, so rotating ``JWT_SECRET`` invalidates every outstanding token.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

ALGORITHM = "HS256"


@dataclass(frozen=True)
class TokenClaims:
    """Decoded payload of a session token."""

    user_id: int
    username: str
    role: str
    issued_at: datetime
    expires_at: datetime


def create_access_token(
    user,
    secret: str,
    expires_in: int,
    now: Optional[datetime] = None,
    algorithm: str = ALGORITHM,
) -> str:
    """Create a signed access token for a user.

    Args:
        user: Object exposing ``id``, ``username`` and ``role``
        secret: Signing secret
        expires_in: Token lifetime in seconds
        now: Issue time (defaults to the current UTC time)
        algorithm: JWT signing algorithm

    Returns:
        str: Encoded JWT token
    """
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "sub": str(user.id),
        "username": user.username,
        "role": user.role,
        "iat": issued_at,
        "exp": issued_at + timedelta(seconds=expires_in),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def verify_access_token(token: str, secret: str, algorithm: str = ALGORITHM) -> Optional[TokenClaims]:
    """Verify a token's signature and expiry.

    Returns:
        TokenClaims on success, ``None`` for a bad signature, malformed token,
        expired token or missing claims.
    """
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except JWTError:
        return None

    try:
        return TokenClaims(
            user_id=int(payload["sub"]),
            username=payload["username"],
            role=payload["role"],
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
    except (KeyError, TypeError, ValueError):
        return None
