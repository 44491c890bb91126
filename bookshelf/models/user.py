"""User model."""

from sqlalchemy import Column, Integer, String

from bookshelf.database import Base
from bookshelf.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    username = Column(String(20), unique=True, nullable=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    profile_slug = Column(String(20), unique=True, nullable=True, index=True)

    @property
    def public_id(self) -> str:
        """Identifier used in public profile links: the slug, or the raw id."""
        return self.profile_slug or str(self.id)
