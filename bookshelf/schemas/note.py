"""Note schemas."""

from datetime import datetime

from pydantic import ConfigDict, Field, field_validator

from bookshelf.schemas.base import CamelModel


class NoteCreate(CamelModel):
    """Attach a note to one of the user's books."""

    book_id: int
    content: str = Field(..., min_length=1, max_length=20000)
    is_public: bool = False


class NoteUpdate(CamelModel):
    """Update a note."""

    content: str | None = Field(None, min_length=1, max_length=20000)
    is_public: bool | None = None

    @field_validator("content", "is_public")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class NoteResponse(CamelModel):
    """Note response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    book_id: int
    content: str
    is_public: bool
    created_at: datetime
    updated_at: datetime
