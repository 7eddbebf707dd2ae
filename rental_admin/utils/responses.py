"""Shared response models and helpers for consistent API responses."""

from pydantic import BaseModel, Field
from fastapi.responses import JSONResponse


class ErrorResponse(BaseModel):
    """Standard error response structure."""

    error: str = Field(..., description="Human-readable error message")

    model_config = {
        "json_schema_extra": {
            "example": {"error": "Listing not found"}
        }
    }


class AckResponse(BaseModel):
    """Acknowledgement for mutations that return no payload."""

    success: bool = Field(default=True)

    model_config = {
        "json_schema_extra": {
            "example": {"success": True}
        }
    }


def error_response(status_code: int, message: str) -> JSONResponse:
    """Create an error response."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


# Error bodies documented on every protected route
ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}
