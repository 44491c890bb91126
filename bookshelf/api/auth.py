"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from bookshelf.api.dependencies import get_account_user, get_current_user
from bookshelf.database import get_db
from bookshelf.errors import Conflict, NotFound, Unauthorized, ValidationError
from bookshelf.models.user import User
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
from bookshelf.services import users
from bookshelf.services.passwords import PasswordHasher, get_password_hasher, password_problems
from bookshelf.services.session_cookie import clear_session_cookie, set_session_cookie
from bookshelf.services.tokens import TokenService, get_token_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

INVALID_CREDENTIALS = "Invalid email or password"


def check_password_strength(password: str, message: str | None = None) -> None:
    """Raise ValidationError unless the password satisfies every strength rule."""
    problems = password_problems(password)
    if problems:
        raise ValidationError(message or ", ".join(problems))


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
):
    """Register a new user. No session is started; the client logs in afterwards."""
    if not users.is_valid_name(user_data.name):
        raise ValidationError("Name must be between 2 and 50 characters")

    if user_data.username and not users.is_valid_handle(user_data.username):
        raise ValidationError(
            "Username must be between 3 and 20 characters and can only contain letters, "
            "numbers, underscores, and hyphens"
        )

    if not users.is_valid_email(user_data.email):
        raise ValidationError("Please provide a valid email address")

    check_password_strength(user_data.password)

    if users.get_user_by_email(db, user_data.email):
        raise Conflict(
            "An account with this email already exists", status_code=status.HTTP_400_BAD_REQUEST
        )

    if user_data.username and users.get_user_by_username(db, user_data.username):
        raise Conflict("This username is already taken", status_code=status.HTTP_400_BAD_REQUEST)

    password_hash = await run_in_threadpool(hasher.hash, user_data.password)
    user = users.create_user(
        db,
        name=user_data.name,
        email=user_data.email,
        password_hash=password_hash,
        username=user_data.username or None,
    )
    logger.info(f"Registered user {user.id}")

    return RegisterResponse(message="Account created successfully! Please log in.", user_id=user.id)


@router.post("/login", response_model=MessageResponse)
async def login(
    credentials: UserLogin,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
):
    """Login with email and password and start a cookie session."""
    user = users.get_user_by_email(db, credentials.email)
    password_hash = user.password_hash if user else None

    if not await run_in_threadpool(hasher.verify, credentials.password, password_hash):
        logger.info("Failed login attempt")
        raise Unauthorized(INVALID_CREDENTIALS)

    set_session_cookie(response, tokens.issue(user.id))
    logger.info(f"User {user.id} logged in")

    return MessageResponse(message="Login successful")


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response):
    """End the session by expiring the cookie. Works without a session too."""
    clear_session_cookie(response)
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    data: PasswordChange,
    current_user: Annotated[User, Depends(get_account_user)],
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
):
    """Change the password after confirming the old one."""
    if not await run_in_threadpool(hasher.verify, data.old_password, current_user.password_hash):
        raise ValidationError("Old password is incorrect")

    check_password_strength(data.new_password, "New password does not meet requirements")

    current_user.password_hash = await run_in_threadpool(hasher.hash, data.new_password)
    users.commit_user(db, current_user)
    logger.info(f"User {current_user.id} changed password")

    return MessageResponse(message="Password updated successfully")


@router.post("/change-email", response_model=MessageResponse)
async def change_email(
    data: EmailChange,
    current_user: Annotated[User, Depends(get_account_user)],
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
):
    """Change the account email after confirming the password."""
    if not await run_in_threadpool(hasher.verify, data.password, current_user.password_hash):
        raise ValidationError("Password is incorrect")

    if not users.is_valid_email(data.new_email):
        raise ValidationError("Invalid email format")

    new_email = users.normalize_email(data.new_email)
    if users.is_taken(db, User.email, new_email, exclude_user_id=current_user.id):
        raise Conflict("Email already in use", status_code=status.HTTP_400_BAD_REQUEST)

    current_user.email = new_email
    users.commit_user(db, current_user, conflict_status=status.HTTP_400_BAD_REQUEST)
    logger.info(f"User {current_user.id} changed email")

    return MessageResponse(message="Email updated successfully")


@router.post("/change-username", response_model=MessageResponse)
async def change_username(
    data: UsernameChange,
    current_user: Annotated[User, Depends(get_account_user)],
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
):
    """Change the username after confirming the password."""
    if not await run_in_threadpool(hasher.verify, data.password, current_user.password_hash):
        raise Unauthorized("Invalid password")

    if not users.is_valid_handle(data.new_username):
        raise ValidationError(
            "Username must be between 3 and 20 characters and can only contain letters, "
            "numbers, underscores, and hyphens"
        )

    new_username = users.normalize_handle(data.new_username)
    if users.is_taken(db, User.username, new_username, exclude_user_id=current_user.id):
        raise Conflict("Username is already taken")

    current_user.username = new_username
    users.commit_user(db, current_user)
    logger.info(f"User {current_user.id} changed username")

    return MessageResponse(message="Username updated successfully")


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    data: PasswordReset,
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
):
    """Set a new password for the account with the given email.

    Anyone who knows an account's email can reset its password; there is no
    emailed one-time code yet.
    """
    check_password_strength(data.new_password, "Password does not meet requirements")

    user = users.get_user_by_email(db, data.email)
    if user is None:
        raise NotFound("No user found with this email")

    user.password_hash = await run_in_threadpool(hasher.hash, data.new_password)
    users.commit_user(db, user)
    logger.warning(f"Password reset without ownership proof for user {user.id}")

    return MessageResponse(message="Password reset successfully! You can now log in.")
