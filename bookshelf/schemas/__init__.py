"""Pydantic schemas for API requests and responses."""

from bookshelf.schemas.auth import (
    EmailChange,
    MessageResponse,
    PasswordChange,
    PasswordReset,
    RegisterResponse,
    UserLogin,
    UsernameChange,
    UserRegister,
    UserResponse,
)
from bookshelf.schemas.book import BookCreate, BookResponse, BookUpdate
from bookshelf.schemas.note import NoteCreate, NoteResponse, NoteUpdate
from bookshelf.schemas.user import ProfileResponse, PublicUser, SlugResponse, SlugUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "PasswordChange",
    "EmailChange",
    "UsernameChange",
    "PasswordReset",
    "MessageResponse",
    "RegisterResponse",
    "UserResponse",
    "SlugUpdate",
    "SlugResponse",
    "PublicUser",
    "ProfileResponse",
    "BookCreate",
    "BookUpdate",
    "BookResponse",
    "NoteCreate",
    "NoteUpdate",
    "NoteResponse",
]
