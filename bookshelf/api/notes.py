"""Note API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from bookshelf.api.books import get_user_book
from bookshelf.api.dependencies import require_session
from bookshelf.database import MAX_ID, get_db
from bookshelf.errors import NotFound
from bookshelf.models.note import Note
from bookshelf.schemas.auth import MessageResponse
from bookshelf.schemas.note import NoteCreate, NoteResponse, NoteUpdate

router = APIRouter(prefix="/notes", tags=["notes"])


def get_user_note(db: Session, note_id: int, user_id: int) -> Note:
    """Get a note owned by the user."""
    note = db.query(Note).filter(Note.id == note_id, Note.user_id == user_id).first()
    if not note:
        raise NotFound("Note not found")
    return note


@router.get("", response_model=list[NoteResponse])
async def get_notes(
    user_id: Annotated[int, Depends(require_session)],
    db: Annotated[Session, Depends(get_db)],
    book_id: int | None = Query(default=None, alias="bookId", description="Filter by book"),
):
    """Get the current user's notes, most recently updated first."""
    query = db.query(Note).filter(Note.user_id == user_id)
    if book_id is not None:
        query = query.filter(Note.book_id == book_id)
    return query.order_by(Note.updated_at.desc(), Note.id.desc()).all()


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    note_data: NoteCreate,
    user_id: Annotated[int, Depends(require_session)],
    db: Annotated[Session, Depends(get_db)],
):
    """Attach a note to one of the current user's books."""
    get_user_book(db, note_data.book_id, user_id)

    note = Note(**note_data.model_dump(), user_id=user_id)
    db.add(note)
    db.commit()
    db.refresh(note)
    return note


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: Annotated[int, Path(ge=1, le=MAX_ID)],
    note_data: NoteUpdate,
    user_id: Annotated[int, Depends(require_session)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update one of the current user's notes."""
    note = get_user_note(db, note_id, user_id)

    update_data = note_data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(note, field, value)

    db.commit()
    db.refresh(note)
    return note


@router.delete("/{note_id}", response_model=MessageResponse)
async def delete_note(
    note_id: Annotated[int, Path(ge=1, le=MAX_ID)],
    user_id: Annotated[int, Depends(require_session)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete one of the current user's notes."""
    note = get_user_note(db, note_id, user_id)
    db.delete(note)
    db.commit()
    return MessageResponse(message="Note deleted")
