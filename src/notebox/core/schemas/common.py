"""
Shared response schemas - envelopes, errors, health
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SuccessResponse(BaseModel):
    """Envelope every successful API response extends."""

    success: bool = Field(default=True, description="Operation success status")
    message: Optional[str] = Field(default=None, description="Human-readable message")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "message": "Signed out successfully",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    success: bool = Field(default=False)
    statusCode: int = Field(description="HTTP status code")
    error: str = Field(description="Error kind")
    message: str = Field(description="Human-readable error message")
    detail: Optional[str] = Field(default=None, description="Exception text (non-production only)")
    stack: Optional[list[str]] = Field(default=None, description="Traceback (non-production only)")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "statusCode": 403,
                "error": "forbidden",
                "message": "You can only modify your own notes",
            }
        }
    )


def error_responses(*status_codes: int) -> dict[int, dict[str, Any]]:
    """OpenAPI ``responses`` entries documenting the error body."""
    return {code: {"model": ErrorResponse} for code in status_codes}


class HealthCheckResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(description="Overall health status")
    timestamp: datetime = Field(default_factory=_utcnow)
    version: str = Field(description="Application version")
    checks: dict[str, dict[str, Any]] = Field(description="Individual component health checks")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "healthy",
                "timestamp": "2025-09-13T10:30:00Z",
                "version": "1.0.0",
                "checks": {
                    "database": {
                        "status": "healthy",
                        "response_time_ms": 15,
                    }
                },
            }
        }
    )
