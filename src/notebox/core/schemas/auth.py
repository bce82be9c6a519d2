"""
Authentication schemas.

These schemas define the API contracts for signup, signin and the
authenticated user profile.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from .common import SuccessResponse


class SignupRequest(BaseModel):
    """User registration request schema."""

    username: str = Field(min_length=1, max_length=50, description="Display name")
    email: EmailStr = Field(description="Unique email address")
    password: str = Field(min_length=8, max_length=128, description="User password")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Username cannot be empty")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower()

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "Jane Doe",
                "email": "jane@example.com",
                "password": "securepassword123",
            }
        }
    )


class SigninRequest(BaseModel):
    """User login request schema."""

    email: EmailStr = Field(description="Account email")
    password: str = Field(min_length=1, max_length=128, description="User password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower()

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "jane@example.com",
                "password": "securepassword123",
            }
        }
    )


class UserResponse(BaseModel):
    """Public user profile; never includes the password hash."""

    id: uuid.UUID = Field(description="User unique identifier")
    username: str = Field(description="Display name")
    email: str = Field(description="Email address")
    created_at: datetime = Field(description="Account creation timestamp")
    updated_at: Optional[datetime] = Field(default=None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)


class UserEnvelope(SuccessResponse):
    user: UserResponse


class SessionResult(BaseModel):
    """Outcome of a successful sign-in: the profile plus the token the
    transport layer puts into the session cookie."""

    user: UserResponse
    token: str
    expires_in: int = Field(description="Token lifetime in seconds")
