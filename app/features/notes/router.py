"""
Note endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.database import get_db
from app.features.auth.dependencies import CurrentUser
from app.features.notes.service import note_service
from app.schemas.common import MessageResponse
from app.schemas.note import (
    CategoryListResponse,
    NoteCreate,
    NoteFilter,
    NoteListResponse,
    NoteRead,
    NoteResponse,
    NoteUpdate,
)

router = APIRouter(prefix="/notes", tags=["Notes"])


@router.get("", response_model=NoteListResponse)
async def list_notes(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    page: int = Query(1, description="Page number (values below 1 are treated as 1)"),
    limit: int = Query(settings.default_page_size, description="Page size (clamped to 1..max)"),
    category: str | None = Query(None, description="Exact category; 'All' disables the filter"),
    search: str | None = Query(None, max_length=200, description="Case-insensitive match on title or content"),
    is_archived: bool = Query(False, alias="isArchived", description="List archived instead of active notes"),
) -> NoteListResponse:
    """
    List the caller's own notes.

    Sorted pinned first, then most recently updated.
    """
    filters = NoteFilter(
        page=page,
        limit=limit,
        category=category,
        search=search,
        is_archived=is_archived,
    )
    notes, pagination = await note_service.list_notes(db, current_user, filters)

    return NoteListResponse(
        notes=[NoteRead.model_validate(note) for note in notes],
        pagination=pagination,
    )


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    data: NoteCreate,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> NoteResponse:
    """
    Create a note.

    Free tenants are limited to a fixed number of active notes (402 beyond it).
    """
    note = await note_service.create_note(db, current_user, data)
    return NoteResponse(
        message="Note created successfully",
        note=NoteRead.model_validate(note),
    )


@router.get("/categories/list", response_model=CategoryListResponse)
async def list_categories(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CategoryListResponse:
    """Distinct categories used by the caller's notes."""
    categories = await note_service.list_categories(db, current_user)
    return CategoryListResponse(categories=categories)


@router.get("/{note_id}", response_model=NoteRead)
async def get_note(
    note_id: str,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> NoteRead:
    """Get a note the caller authored or that is shared with them."""
    note = await note_service.get_note(db, note_id, current_user)
    return NoteRead.model_validate(note)


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: str,
    data: NoteUpdate,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> NoteResponse:
    """
    Update a note (author only).

    Supplying sharedWith replaces the whole sharing list.
    """
    note = await note_service.update_note(db, note_id, current_user, data)
    return NoteResponse(
        message="Note updated successfully",
        note=NoteRead.model_validate(note),
    )


@router.delete("/{note_id}", response_model=MessageResponse)
async def delete_note(
    note_id: str,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    """Permanently delete a note (author only)."""
    await note_service.delete_note(db, note_id, current_user)
    return MessageResponse(message="Note deleted successfully")


@router.patch("/{note_id}/pin", response_model=NoteResponse)
async def toggle_pin(
    note_id: str,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> NoteResponse:
    note = await note_service.toggle_pin(db, note_id, current_user)
    state = "pinned" if note.is_pinned else "unpinned"
    return NoteResponse(
        message=f"Note {state} successfully",
        note=NoteRead.model_validate(note),
    )


@router.patch("/{note_id}/archive", response_model=NoteResponse)
async def toggle_archive(
    note_id: str,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> NoteResponse:
    note = await note_service.toggle_archive(db, note_id, current_user)
    state = "archived" if note.is_archived else "unarchived"
    return NoteResponse(
        message=f"Note {state} successfully",
        note=NoteRead.model_validate(note),
    )
