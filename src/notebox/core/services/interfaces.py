"""
Service interfaces for Notebox.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List
from uuid import UUID

from ..schemas.auth import SessionResult, SigninRequest, SignupRequest, UserResponse
from ..schemas.common import HealthCheckResponse
from ..schemas.notes import NoteCreate, NoteResponse, NoteUpdate


class IAuthService(ABC):
    """Credential store access and session issuing."""

    @abstractmethod
    async def signup(self, request: SignupRequest) -> UserResponse:
        """Register new user."""
        pass

    @abstractmethod
    async def signin(self, request: SigninRequest) -> SessionResult:
        """Verify credentials and issue a session token."""
        pass

    @abstractmethod
    async def get_current_user(self, user_id: UUID) -> UserResponse:
        """Get user by ID."""
        pass


class INoteService(ABC):
    """Owner-scoped note operations."""

    @abstractmethod
    async def create_note(self, user_id: UUID, request: NoteCreate) -> NoteResponse:
        """Create new note."""
        pass

    @abstractmethod
    async def get_note(self, note_id: UUID, user_id: UUID) -> NoteResponse:
        """Get note by ID."""
        pass

    @abstractmethod
    async def update_note(self, note_id: UUID, user_id: UUID, request: NoteUpdate) -> NoteResponse:
        """Update existing note."""
        pass

    @abstractmethod
    async def delete_note(self, note_id: UUID, user_id: UUID) -> None:
        """Delete note."""
        pass

    @abstractmethod
    async def list_notes(self, user_id: UUID) -> List[NoteResponse]:
        """List all notes of the user."""
        pass

    @abstractmethod
    async def search_notes(self, user_id: UUID, query: str) -> List[NoteResponse]:
        """Substring search within the user's notes."""
        pass

    @abstractmethod
    async def set_pinned(self, note_id: UUID, user_id: UUID, pinned: bool) -> NoteResponse:
        """Pin or unpin a note."""
        pass


class IHealthService(ABC):
    """Health check service."""

    @abstractmethod
    async def get_health_status(self) -> HealthCheckResponse:
        """Get app health status."""
        pass

    @abstractmethod
    async def check_database_health(self) -> Dict[str, Any]:
        """Check DB connection."""
        pass
