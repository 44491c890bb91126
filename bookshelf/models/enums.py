"""Enums for model fields."""

from enum import Enum


class BookStatus(str, Enum):
    """Reading status of a book on a user's shelf."""

    WISHLIST = "wishlist"
    READING = "reading"
    FINISHED = "finished"
    ABANDONED = "abandoned"
