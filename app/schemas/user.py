"""
User Pydantic Schemas

These schemas define the shape of data for User-related API operations.

Schemas:
- UserCreate: Registration data (username, email, password)
- LoginRequest: Credentials for login
- UserUpdate: Partial profile update (username, email)
- UserResponse: Public user data (never exposes the password hash)
- UserListResponse: All users plus a count
- TokenResponse: Access token returned by login
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.services.validation import (
    USERNAME_LENGTH,
    is_valid_email,
    is_valid_length,
    is_valid_password,
)

USERNAME_MESSAGE = "Username must be between 3 and 20 characters"
EMAIL_MESSAGE = "Please provide a valid email address"
PASSWORD_MESSAGE = (
    "Password must be at least 6 characters long and contain "
    "at least one letter and one number"
)


def _clean_username(v: str) -> str:
    if not is_valid_length(v, *USERNAME_LENGTH):
        raise ValueError(USERNAME_MESSAGE)
    return v.strip()


def _clean_email(v: str) -> str:
    v = v.strip()
    if not is_valid_email(v):
        raise ValueError(EMAIL_MESSAGE)
    return v.lower()


class UserCreate(BaseModel):
    """
    Schema for user registration.

    Example request body:
    {
        "username": "johndoe",
        "email": "john@example.com",
        "password": "abc123"
    }
    """

    username: str = Field(
        ...,
        description="Unique username (3-20 characters)",
        examples=["johndoe"],
    )

    email: str = Field(
        ...,
        description="Unique email address (case-insensitive)",
        examples=["john@example.com"],
    )

    password: str = Field(
        ...,
        description="Password (min 6 chars, at least one letter and one number)",
        examples=["abc123"],
    )

    @field_validator("username")
    @classmethod
    def username_must_be_valid(cls, v: str) -> str:
        """Trim the username and enforce its length bounds."""
        return _clean_username(v)

    @field_validator("email")
    @classmethod
    def email_must_be_valid(cls, v: str) -> str:
        """Trim, check the email shape and normalize to lowercase."""
        return _clean_email(v)

    @field_validator("password")
    @classmethod
    def password_must_be_valid(cls, v: str) -> str:
        """
        Validate password strength.

        Only letters, digits and @$!%*#?& are accepted; any other
        character makes the password invalid.
        """
        if not is_valid_password(v):
            raise ValueError(PASSWORD_MESSAGE)
        return v


class LoginRequest(BaseModel):
    """Credentials for POST /auth/login."""

    email: str = Field(..., min_length=1, examples=["john@example.com"])
    password: str = Field(..., min_length=1, examples=["abc123"])


class UserUpdate(BaseModel):
    """
    Schema for updating a user profile.

    Fields left out of the request body are unchanged. A field that is
    present must be valid: null or empty values are rejected.
    """

    username: str | None = Field(
        default=None,
        description="New username (3-20 characters)",
    )

    email: str | None = Field(
        default=None,
        description="New email address",
    )

    @field_validator("username")
    @classmethod
    def username_must_be_valid(cls, v: str | None) -> str:
        if v is None:
            raise ValueError(USERNAME_MESSAGE)
        return _clean_username(v)

    @field_validator("email")
    @classmethod
    def email_must_be_valid(cls, v: str | None) -> str:
        if v is None:
            raise ValueError(EMAIL_MESSAGE)
        return _clean_email(v)


class UserResponse(BaseModel):
    """
    Schema for user responses (what the API returns).

    SECURITY: Never includes the password hash.
    """

    id: str = Field(..., description="Unique user identifier")
    username: str = Field(..., description="Unique username")
    email: str = Field(..., description="User's email address")
    created_at: datetime = Field(..., description="When the user registered")
    updated_at: datetime = Field(..., description="When the profile last changed")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "6f1c2a1e-6c3b-4e0e-9f64-1b2f0d1c9a11",
                "username": "johndoe",
                "email": "john@example.com",
                "created_at": "2024-01-15T10:30:00Z",
                "updated_at": "2024-01-15T10:30:00Z",
            }
        },
    )


class UserListResponse(BaseModel):
    """All registered users."""

    items: list[UserResponse]
    count: int = Field(..., ge=0)


class TokenResponse(BaseModel):
    """
    Schema for the login response.

    The same token is also set as an httpOnly cookie.
    """

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: UserResponse
