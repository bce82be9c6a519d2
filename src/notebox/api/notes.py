"""Notes API endpoints.

Static paths (``/all``, ``/search``) are declared before ``/{note_id}``.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.common import SuccessResponse, error_responses
from ..core.schemas.notes import (
    NoteCreate,
    NoteEnvelope,
    NoteListEnvelope,
    NoteUpdate,
    PinUpdate,
)
from ..core.services import NoteService
from ..database import get_db_session
from ..middleware.auth import get_current_user_id

router = APIRouter(
    prefix="/note",
    tags=["notes"],
    responses=error_responses(400, 401, 403, 404, 500),
)


@router.get("/all", response_model=NoteListEnvelope)
async def list_notes(
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """List the caller's notes, pinned first."""
    note_service = NoteService(session)
    notes = await note_service.list_notes(current_user_id)
    return NoteListEnvelope(message="Notes retrieved successfully", notes=notes)


@router.get("/search", response_model=NoteListEnvelope)
async def search_notes(
    query: str = Query(""),
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Case-insensitive substring search over title and content."""
    note_service = NoteService(session)
    notes = await note_service.search_notes(current_user_id, query)
    return NoteListEnvelope(message="Notes matching the query retrieved", notes=notes)


@router.post("/add", response_model=NoteEnvelope, status_code=status.HTTP_201_CREATED)
async def add_note(
    request: NoteCreate,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Create a new note."""
    note_service = NoteService(session)
    note = await note_service.create_note(current_user_id, request)
    return NoteEnvelope(message="Note added successfully", note=note)


@router.put("/edit/{note_id}", response_model=NoteEnvelope)
async def edit_note(
    note_id: UUID,
    request: NoteUpdate,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Apply a partial update to a note."""
    note_service = NoteService(session)
    note = await note_service.update_note(note_id, current_user_id, request)
    return NoteEnvelope(message="Note updated successfully", note=note)


@router.delete("/delete/{note_id}", response_model=SuccessResponse)
async def delete_note(
    note_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete a note."""
    note_service = NoteService(session)
    await note_service.delete_note(note_id, current_user_id)
    return SuccessResponse(message="Note deleted successfully")


@router.put("/update-note-pinned/{note_id}", response_model=NoteEnvelope)
async def update_note_pinned(
    note_id: UUID,
    request: PinUpdate,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Pin or unpin a note."""
    note_service = NoteService(session)
    note = await note_service.set_pinned(note_id, current_user_id, request.is_pinned)
    message = "Note pinned successfully" if note.is_pinned else "Note unpinned successfully"
    return NoteEnvelope(message=message, note=note)


@router.get("/{note_id}", response_model=NoteEnvelope, response_model_exclude_none=True)
async def get_note(
    note_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Get a specific note."""
    note_service = NoteService(session)
    note = await note_service.get_note(note_id, current_user_id)
    return NoteEnvelope(note=note)
