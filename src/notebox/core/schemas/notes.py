"""
Note management schemas.

These schemas define the API contracts for note CRUD, pinning and search.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .common import SuccessResponse

MAX_TAGS = 50
MAX_TAG_LENGTH = 50


def _check_tags(tags: List[str]) -> List[str]:
    for tag in tags:
        if len(tag.strip()) > MAX_TAG_LENGTH:
            raise ValueError(f"Tags must be at most {MAX_TAG_LENGTH} characters")
    return tags


def _require_text(v: str, field: str) -> str:
    if not v.strip():
        raise ValueError(f"{field} cannot be empty")
    return v.strip()


class NoteCreate(BaseModel):
    """Note creation request schema."""

    title: str = Field(max_length=200, description="Note title")
    content: str = Field(description="Note content")
    tags: List[str] = Field(default_factory=list, max_length=MAX_TAGS, description="Note tags")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return _require_text(v, "Title")

    @field_validator("content")
    @classmethod
    def validate_content(cls, v):
        return _require_text(v, "Content")

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v):
        return _check_tags(v)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Groceries",
                "content": "milk, eggs",
                "tags": ["home"],
            }
        }
    )


class NoteUpdate(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    title: Optional[str] = Field(default=None, max_length=200, description="Note title")
    content: Optional[str] = Field(default=None, description="Note content")
    tags: Optional[List[str]] = Field(default=None, max_length=MAX_TAGS, description="Note tags")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return None if v is None else _require_text(v, "Title")

    @field_validator("content")
    @classmethod
    def validate_content(cls, v):
        return None if v is None else _require_text(v, "Content")

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v):
        return None if v is None else _check_tags(v)

    def has_changes(self) -> bool:
        return any(value is not None for value in (self.title, self.content, self.tags))


class PinUpdate(BaseModel):
    """Pin toggle body; accepts the frontend's ``isPinned`` key too."""

    is_pinned: bool = Field(validation_alias=AliasChoices("is_pinned", "isPinned"))


class NoteResponse(BaseModel):
    """Note response schema."""

    id: uuid.UUID = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note content")
    tags: List[str] = Field(description="Note tags in insertion order")
    is_pinned: bool = Field(description="Whether the note is pinned")
    owner_id: uuid.UUID = Field(description="Note owner ID")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "title": "Groceries",
                "content": "milk, eggs",
                "tags": ["home"],
                "is_pinned": False,
                "owner_id": "456e7890-e89b-12d3-a456-426614174000",
                "created_at": "2025-09-13T10:30:00Z",
                "updated_at": "2025-09-13T11:00:00Z",
            }
        },
    )


class NoteEnvelope(SuccessResponse):
    note: NoteResponse


class NoteListEnvelope(SuccessResponse):
    notes: List[NoteResponse]
