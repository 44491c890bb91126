"""Book API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from bookshelf.api.dependencies import get_optional_user_id, require_session
from bookshelf.database import MAX_ID, get_db
from bookshelf.errors import NotFound
from bookshelf.models.book import Book
from bookshelf.schemas.auth import MessageResponse
from bookshelf.schemas.book import BookCreate, BookResponse, BookUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/books", tags=["books"])


def get_user_book(db: Session, book_id: int, user_id: int) -> Book:
    """Get a book owned by the user.

    Other users' books are reported as missing rather than forbidden.
    """
    book = db.query(Book).filter(Book.id == book_id, Book.user_id == user_id).first()
    if not book:
        raise NotFound("Book not found")
    return book


@router.get("", response_model=list[BookResponse])
async def get_books(
    user_id: Annotated[int, Depends(require_session)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get all books on the current user's shelf."""
    return (
        db.query(Book)
        .filter(Book.user_id == user_id)
        .order_by(Book.created_at.desc(), Book.id.desc())
        .all()
    )


@router.post("", response_model=BookResponse, status_code=status.HTTP_201_CREATED)
async def create_book(
    book_data: BookCreate,
    user_id: Annotated[int, Depends(require_session)],
    db: Annotated[Session, Depends(get_db)],
):
    """Add a book to the current user's shelf."""
    book = Book(**book_data.model_dump(), user_id=user_id)
    db.add(book)
    db.commit()
    db.refresh(book)
    logger.info(f"User {user_id} added book {book.id}")
    return book


@router.get("/{book_id}", response_model=BookResponse)
async def get_book(
    book_id: Annotated[int, Path(ge=1, le=MAX_ID)],
    user_id: Annotated[int | None, Depends(get_optional_user_id)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a book the current user owns, or any public book."""
    visible = Book.is_public.is_(True)
    if user_id is not None:
        visible = or_(visible, Book.user_id == user_id)

    book = db.query(Book).filter(Book.id == book_id, visible).first()
    if not book:
        raise NotFound("Book not found")
    return book


@router.put("/{book_id}", response_model=BookResponse)
async def update_book(
    book_id: Annotated[int, Path(ge=1, le=MAX_ID)],
    book_data: BookUpdate,
    user_id: Annotated[int, Depends(require_session)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update a book on the current user's shelf."""
    book = get_user_book(db, book_id, user_id)

    update_data = book_data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(book, field, value)

    db.commit()
    db.refresh(book)
    return book


@router.delete("/{book_id}", response_model=MessageResponse)
async def delete_book(
    book_id: Annotated[int, Path(ge=1, le=MAX_ID)],
    user_id: Annotated[int, Depends(require_session)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a book and its notes."""
    book = get_user_book(db, book_id, user_id)
    db.delete(book)
    db.commit()
    logger.info(f"User {user_id} deleted book {book_id}")
    return MessageResponse(message="Book deleted")
