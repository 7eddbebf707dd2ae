"""Authentication request and response schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Request schema for admin login.

    Both fields are optional at the schema level so that a missing field is
    reported with the login-specific 400 message.
    """

    username: Optional[str] = Field(default=None, description="Account username")
    password: Optional[str] = Field(default=None, description="Account password")

    model_config = {"json_schema_extra": {"example": {
        "username": "admin",
        "password": "admin123"
    }}}


class UserResponse(BaseModel):
    """Public view of a user (never includes the password hash)."""

    id: int = Field(..., description="User ID")
    username: str = Field(..., description="Username")
    role: str = Field(..., description="Role, e.g. 'admin'")
    created_at: Optional[datetime] = Field(default=None, description="Account creation time")

    model_config = {"from_attributes": True, "json_schema_extra": {"example": {
        "id": 1,
        "username": "admin",
        "role": "admin",
        "created_at": "2025-11-03T15:58:36Z"
    }}}


class LoginResponse(BaseModel):
    """Response schema for a successful login."""

    token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token expiration time in seconds")
    user: UserResponse

    model_config = {"json_schema_extra": {"example": {
        "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
        "token_type": "bearer",
        "expires_in": 86400,
        "user": {"id": 1, "username": "admin", "role": "admin", "created_at": "2025-11-03T15:58:36Z"}
    }}}


class VerifyResponse(BaseModel):
    """Response schema for token verification."""

    user: UserResponse
