"""
Pydantic schemas for validating and documenting API requests and responses.
"""

from .auth import SessionResult, SigninRequest, SignupRequest, UserEnvelope, UserResponse
from .common import ErrorResponse, HealthCheckResponse, SuccessResponse, error_responses
from .notes import (
    NoteCreate,
    NoteEnvelope,
    NoteListEnvelope,
    NoteResponse,
    NoteUpdate,
    PinUpdate,
)

__all__ = [
    # Auth schemas
    "SignupRequest",
    "SigninRequest",
    "UserResponse",
    "UserEnvelope",
    "SessionResult",
    # Note schemas
    "NoteCreate",
    "NoteUpdate",
    "PinUpdate",
    "NoteResponse",
    "NoteEnvelope",
    "NoteListEnvelope",
    # Common schemas
    "SuccessResponse",
    "ErrorResponse",
    "HealthCheckResponse",
    "error_responses",
]
