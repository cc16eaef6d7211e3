"""
Record Models Package

This package contains the models for records stored in the JSON documents.
Models are Pydantic classes that describe exactly what one entry in a
document's array looks like.

Documents:
- users.json: {"users": [User, ...]}
- books.json: {"books": [Book, ...]}

Relationships:
- User -> Book: One-to-Many through Book.user_id. The reference is not
  enforced: deleting a user leaves their books in place.

Import all models here to make them available as:
    from app.models import Book, User
"""

from app.models.base import Record, utc_now
from app.models.book import Book
from app.models.user import User

__all__ = [
    "Record",
    "utc_now",
    "Book",
    "User",
]
