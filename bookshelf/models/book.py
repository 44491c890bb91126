"""Book model."""

from sqlalchemy import JSON, Boolean, Column, Date, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from bookshelf.database import Base
from bookshelf.models.enums import BookStatus
from bookshelf.models.mixins import TimestampMixin


class Book(Base, TimestampMixin):
    """A book on a user's shelf, with metadata copied from the search catalog."""

    __tablename__ = "books"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    google_id = Column(String(64), nullable=False)
    title = Column(String(500), nullable=True)
    authors = Column(JSON, nullable=False, default=list)
    thumbnail = Column(String(1000), nullable=True)
    categories = Column(JSON, nullable=False, default=list)
    status = Column(String(20), nullable=False, default=BookStatus.WISHLIST.value)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    rating = Column(Float, nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    notes = Column(Text, nullable=True)
    is_public = Column(Boolean, nullable=False, default=False)

    # Relationships
    user = relationship("User", backref="books")
    book_notes = relationship("Note", back_populates="book", cascade="all, delete-orphan")
