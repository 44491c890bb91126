"""Public profile schemas."""

from pydantic import ConfigDict, Field

from bookshelf.schemas.base import CamelModel
from bookshelf.schemas.book import BookResponse
from bookshelf.schemas.note import NoteResponse


class SlugUpdate(CamelModel):
    """Assign a profile slug to the logged-in user."""

    slug: str = Field(..., max_length=255)


class SlugResponse(CamelModel):
    success: bool = True
    profile_slug: str


class PublicUser(CamelModel):
    """The part of a user record shown on their public profile."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    username: str | None
    profile_slug: str | None


class ProfileResponse(CamelModel):
    """Public profile: the user plus the books and notes they chose to publish."""

    user: PublicUser
    books: list[BookResponse]
    notes: list[NoteResponse]
