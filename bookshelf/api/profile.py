"""Public profile endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bookshelf.database import get_db
from bookshelf.errors import NotFound
from bookshelf.models.book import Book
from bookshelf.models.note import Note
from bookshelf.schemas.book import BookResponse
from bookshelf.schemas.note import NoteResponse
from bookshelf.schemas.user import ProfileResponse, PublicUser
from bookshelf.services.users import get_user_by_public_id

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("/{identifier}", response_model=ProfileResponse)
async def get_profile(
    identifier: str,
    db: Annotated[Session, Depends(get_db)],
):
    """Public profile by slug or user id, with only the books and notes marked public."""
    user = get_user_by_public_id(db, identifier)
    if user is None:
        raise NotFound("User not found")

    books = (
        db.query(Book)
        .filter(Book.user_id == user.id, Book.is_public.is_(True))
        .order_by(Book.created_at.desc(), Book.id.desc())
        .all()
    )
    notes = (
        db.query(Note)
        .filter(Note.user_id == user.id, Note.is_public.is_(True))
        .order_by(Note.updated_at.desc(), Note.id.desc())
        .all()
    )

    return ProfileResponse(
        user=PublicUser.model_validate(user),
        books=[BookResponse.model_validate(book) for book in books],
        notes=[NoteResponse.model_validate(note) for note in notes],
    )
