"""Book schemas."""

from datetime import date, datetime

from pydantic import ConfigDict, Field, field_validator

from bookshelf.models.enums import BookStatus
from bookshelf.schemas.base import CamelModel


class BookCreate(CamelModel):
    """Add a book to the shelf."""

    model_config = ConfigDict(use_enum_values=True)

    google_id: str = Field(..., min_length=1, max_length=64)
    title: str | None = Field(None, max_length=500)
    authors: list[str] = Field(default_factory=list)
    thumbnail: str | None = Field(None, max_length=1000)
    categories: list[str] = Field(default_factory=list)
    status: BookStatus = BookStatus.WISHLIST
    start_date: date | None = None
    end_date: date | None = None
    rating: float | None = Field(None, ge=0, le=5)
    tags: list[str] = Field(default_factory=list)
    notes: str | None = Field(None, max_length=10000)
    is_public: bool = False


class BookUpdate(CamelModel):
    """Update a book. Only the fields sent are changed."""

    model_config = ConfigDict(use_enum_values=True)

    title: str | None = Field(None, max_length=500)
    authors: list[str] | None = None
    thumbnail: str | None = Field(None, max_length=1000)
    categories: list[str] | None = None
    status: BookStatus | None = None
    start_date: date | None = None
    end_date: date | None = None
    rating: float | None = Field(None, ge=0, le=5)
    tags: list[str] | None = None
    notes: str | None = Field(None, max_length=10000)
    is_public: bool | None = None

    @field_validator("authors", "categories", "status", "tags", "is_public")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class BookResponse(CamelModel):
    """Book response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    google_id: str
    title: str | None
    authors: list[str]
    thumbnail: str | None
    categories: list[str]
    status: BookStatus
    start_date: date | None
    end_date: date | None
    rating: float | None
    tags: list[str]
    notes: str | None
    is_public: bool
    created_at: datetime
    updated_at: datetime
