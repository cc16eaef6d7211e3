"""
User Model

Represents a registered user in users.json.

Stored shape:
    {
        "id": "6f1c...",
        "username": "johndoe",
        "email": "john@example.com",
        "password": "$2b$12$...",
        "createdAt": "2024-01-15T10:30:00Z",
        "updatedAt": "2024-01-15T10:30:00Z"
    }

The bcrypt hash lives under the "password" key in the document but is
exposed as hashed_password in Python so plain text and hash are never
confused.
"""

from pydantic import Field

from app.models.base import Record


class User(Record):
    """
    A registered user.

    Uniqueness of username and email is case-insensitive and is checked by
    the auth and users routers before writing.
    """

    username: str
    email: str
    hashed_password: str = Field(alias="password")

    def matches_email(self, email: str) -> bool:
        return self.email.lower() == email.strip().lower()

    def matches_username(self, username: str) -> bool:
        return self.username.lower() == username.strip().lower()
