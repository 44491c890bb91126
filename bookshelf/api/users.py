"""User profile settings endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bookshelf.api.dependencies import get_current_user
from bookshelf.database import get_db
from bookshelf.errors import Conflict, ValidationError
from bookshelf.models.user import User
from bookshelf.schemas.user import SlugResponse, SlugUpdate
from bookshelf.services import users

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.put("/slug", response_model=SlugResponse)
async def set_profile_slug(
    data: SlugUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Assign the public profile slug of the logged-in user."""
    if not data.slug.strip() or not users.is_valid_slug(data.slug):
        raise ValidationError("Invalid slug")

    slug = users.normalize_handle(data.slug)
    if users.is_taken(db, User.profile_slug, slug, exclude_user_id=current_user.id):
        raise Conflict("Slug already taken")

    current_user.profile_slug = slug
    users.commit_user(db, current_user)
    logger.info(f"User {current_user.id} set profile slug")

    return SlugResponse(profile_slug=slug)
