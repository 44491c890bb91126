"""SQLAlchemy models."""

from bookshelf.models.book import Book
from bookshelf.models.note import Note
from bookshelf.models.user import User

__all__ = [
    "User",
    "Book",
    "Note",
]
