"""
Book Model

Represents a book in books.json.

Stored shape:
    {
        "id": "0b7a...",
        "title": "1984",
        "author": "George Orwell",
        "genre": "Dystopian",
        "publishedYear": 1949,
        "userId": "6f1c...",
        "createdAt": "2024-01-15T10:30:00Z",
        "updatedAt": "2024-01-15T10:30:00Z"
    }

Older documents hold books without createdAt/updatedAt. Those load with
None timestamps instead of being stamped with the time of the read.
"""

from datetime import datetime
from typing import Any

from pydantic import Field, ValidationInfo, model_validator

from app.models.base import Record, utc_now


class Book(Record):
    """
    A book owned by the user who created it.

    Ownership:
    - user_id is the id of the creating user
    - Only that user may update or delete the book
    - The reference is not enforced; orphaned books stay queryable
    """

    title: str
    author: str
    genre: str
    published_year: int
    user_id: str

    created_at: datetime | None = Field(default_factory=utc_now)
    updated_at: datetime | None = Field(default_factory=utc_now)

    @model_validator(mode="before")
    @classmethod
    def keep_missing_timestamps(cls, data: Any, info: ValidationInfo) -> Any:
        # Only records read back from the document; new books are stamped
        if info.context and info.context.get("stored") and isinstance(data, dict):
            data = dict(data)
            for alias, name in (("createdAt", "created_at"), ("updatedAt", "updated_at")):
                if alias not in data and name not in data:
                    data[alias] = None
        return data

    def is_owned_by(self, user_id: str) -> bool:
        return self.user_id == user_id
