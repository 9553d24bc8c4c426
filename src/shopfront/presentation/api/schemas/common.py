"""Common schemas shared across API endpoints."""

from datetime import datetime, timezone
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope wrapping every endpoint's payload."""

    success: bool = Field(default=True)
    message: str = Field(..., description="Human-readable outcome")
    data: Optional[T] = Field(default=None, description="Endpoint payload")


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    success: bool = Field(default=False)
    error: str = Field(..., description="HTTP status title")
    message: str = Field(..., description="Error message")
    code: str = Field(..., description="Error code for programmatic handling")
    details: Optional[dict[str, Any]] = Field(
        default=None,
        description="Extra context (not returned in production)",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "error": "Unauthorized",
                "message": "Invalid email or password",
                "code": "INVALID_CREDENTIALS",
            },
        },
    )


# Documents the error envelope for every 4xx/5xx a router can return
ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    "4XX": {"model": ErrorResponse, "description": "Client error"},
    "5XX": {"model": ErrorResponse, "description": "Server error"},
}


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    environment: str
    database: str = Field(..., description="'ok' or 'unavailable'")
    timestamp: datetime = Field(default_factory=_utc_now)
