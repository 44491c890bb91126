"""Authentication and account schemas."""

from datetime import datetime

from pydantic import ConfigDict, Field

from bookshelf.schemas.base import CamelModel


class UserRegister(CamelModel):
    """User registration request."""

    name: str = Field(..., min_length=1, max_length=255)
    username: str | None = Field(None, max_length=255)
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class UserLogin(CamelModel):
    """User login request."""

    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class PasswordChange(CamelModel):
    """Change password for the logged-in user."""

    old_password: str = Field(..., min_length=1, max_length=128)
    new_password: str = Field(..., min_length=1, max_length=128)


class EmailChange(CamelModel):
    """Change email for the logged-in user; requires the current password."""

    new_email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class UsernameChange(CamelModel):
    """Change username for the logged-in user; requires the current password."""

    new_username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class PasswordReset(CamelModel):
    """Reset a password by account email."""

    email: str = Field(..., min_length=1, max_length=255)
    new_password: str = Field(..., min_length=1, max_length=128)


class MessageResponse(CamelModel):
    """Plain confirmation message."""

    message: str


class RegisterResponse(MessageResponse):
    """Registration result. No session is started; the client logs in next."""

    user_id: int


class UserResponse(CamelModel):
    """User information response. The password hash is never part of it."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    username: str | None
    email: str
    profile_slug: str | None
    public_id: str
    created_at: datetime
