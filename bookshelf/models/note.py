"""Note model."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from bookshelf.database import Base
from bookshelf.models.mixins import TimestampMixin


class Note(Base, TimestampMixin):
    """Free-text note a user attaches to one of their books."""

    __tablename__ = "notes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    book_id = Column(Integer, ForeignKey("books.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    is_public = Column(Boolean, nullable=False, default=False)

    # Relationships
    user = relationship("User", backref="notes")
    book = relationship("Book", back_populates="book_notes")
