"""Note repository for database operations."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import desc, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.base import utcnow
from ..models.note import Note

# LIKE metacharacters in user queries are matched literally
_LIKE_ESCAPE = "\\"


def _escape_like(value: str) -> str:
    return (
        value.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )


class NoteRepository:
    """Repository for note database operations.

    Lookups by id are not owner-filtered; ownership is decided by the
    service so it can tell "missing" from "someone else's".
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    def _listing_order(self, stmt):
        return stmt.order_by(desc(Note.is_pinned), desc(Note.updated_at), desc(Note.created_at))

    async def create_note(self, note_data: dict) -> Note:
        """Create new note."""
        now = utcnow()
        note = Note(created_at=now, updated_at=now, **note_data)
        self.session.add(note)
        await self.session.commit()
        await self.session.refresh(note)
        return note

    async def get_by_id(self, note_id: UUID) -> Optional[Note]:
        """Get note by ID regardless of owner."""
        stmt = select(Note).where(Note.id == note_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_note(self, note: Note, update_data: dict) -> Note:
        """Apply field updates to a loaded note and bump updated_at."""
        for key, value in update_data.items():
            setattr(note, key, value)
        note.updated_at = utcnow()

        await self.session.commit()
        await self.session.refresh(note)
        return note

    async def delete_note(self, note: Note) -> None:
        """Delete a loaded note."""
        await self.session.delete(note)
        await self.session.commit()

    async def list_user_notes(self, user_id: UUID) -> List[Note]:
        """All notes of a user, pinned first, then most recently modified."""
        stmt = self._listing_order(select(Note).where(Note.owner_id == user_id))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def search_notes(self, user_id: UUID, query: str) -> List[Note]:
        """Case-insensitive substring search over title and content."""
        pattern = f"%{_escape_like(query)}%"
        stmt = select(Note).where(
            Note.owner_id == user_id,
            or_(
                Note.title.ilike(pattern, escape=_LIKE_ESCAPE),
                Note.content.ilike(pattern, escape=_LIKE_ESCAPE),
            ),
        )
        result = await self.session.execute(self._listing_order(stmt))
        return list(result.scalars().all())
