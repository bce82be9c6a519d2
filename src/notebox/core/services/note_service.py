"""Note service implementation.

Every operation is scoped to the caller: a note is resolved by id first
(missing -> NotFound), then its owner is compared with the caller
(mismatch -> Forbidden). Owner ids never come from request bodies.
"""

from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import Forbidden, NotFound, ValidationError
from ..logging import get_logger
from ..models.note import Note
from ..repositories.note_repository import NoteRepository
from ..schemas.notes import NoteCreate, NoteResponse, NoteUpdate
from .interfaces import INoteService

logger = get_logger("notes")


def _clean_text(value: str, field: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"{field} is required")
    return cleaned


class NoteService(INoteService):
    """Note service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.note_repo = NoteRepository(session)

    async def create_note(self, user_id: UUID, request: NoteCreate) -> NoteResponse:
        """Create new note owned by the caller."""
        note = await self.note_repo.create_note(
            {
                "title": _clean_text(request.title, "Title"),
                "content": _clean_text(request.content, "Content"),
                "tags": Note.normalize_tags(request.tags),
                "is_pinned": False,
                "owner_id": user_id,
            }
        )
        logger.info("Note created", extra={"note_id": str(note.id), "user_id": str(user_id)})
        return NoteResponse.model_validate(note)

    async def get_note(self, note_id: UUID, user_id: UUID) -> NoteResponse:
        """Get a single note owned by the caller."""
        note = await self._get_owned_note(note_id, user_id)
        return NoteResponse.model_validate(note)

    async def update_note(self, note_id: UUID, user_id: UUID, request: NoteUpdate) -> NoteResponse:
        """Update only the fields present in the patch."""
        note = await self._get_owned_note(note_id, user_id)
        if not request.has_changes():
            raise ValidationError("No changes provided")

        update_data = {}
        if request.title is not None:
            update_data["title"] = _clean_text(request.title, "Title")
        if request.content is not None:
            update_data["content"] = _clean_text(request.content, "Content")
        if request.tags is not None:
            update_data["tags"] = Note.normalize_tags(request.tags)

        note = await self.note_repo.update_note(note, update_data)
        return NoteResponse.model_validate(note)

    async def delete_note(self, note_id: UUID, user_id: UUID) -> None:
        """Delete a note owned by the caller."""
        note = await self._get_owned_note(note_id, user_id)
        await self.note_repo.delete_note(note)
        logger.info("Note deleted", extra={"note_id": str(note_id), "user_id": str(user_id)})

    async def list_notes(self, user_id: UUID) -> List[NoteResponse]:
        """List the caller's notes, pinned first."""
        notes = await self.note_repo.list_user_notes(user_id)
        return [NoteResponse.model_validate(note) for note in notes]

    async def search_notes(self, user_id: UUID, query: str) -> List[NoteResponse]:
        """Search the caller's notes; a blank query matches nothing."""
        query = (query or "").strip()
        if not query:
            return []
        notes = await self.note_repo.search_notes(user_id, query)
        return [NoteResponse.model_validate(note) for note in notes]

    async def set_pinned(self, note_id: UUID, user_id: UUID, pinned: bool) -> NoteResponse:
        """Pin or unpin a note owned by the caller."""
        note = await self._get_owned_note(note_id, user_id)
        note = await self.note_repo.update_note(note, {"is_pinned": bool(pinned)})
        return NoteResponse.model_validate(note)

    async def _get_owned_note(self, note_id: UUID, user_id: UUID) -> Note:
        note = await self.note_repo.get_by_id(note_id)
        if note is None:
            raise NotFound("Note not found")
        if not note.is_owned_by(user_id):
            logger.warning(
                "Cross-owner note access denied",
                extra={"note_id": str(note_id), "user_id": str(user_id)},
            )
            raise Forbidden("You can only access your own notes")
        return note
