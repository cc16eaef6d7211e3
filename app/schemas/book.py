"""
Book Pydantic Schemas

Handles:
- Field length limits (title, author, genre)
- Published year range (1000 to the current year)
- Partial updates with explicit "unchanged" vs "set" semantics
- Pagination metadata for list responses
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from app.services.validation import (
    AUTHOR_LENGTH,
    GENRE_LENGTH,
    MIN_PUBLISHED_YEAR,
    TITLE_LENGTH,
    current_year,
    is_valid_length,
    is_valid_published_year,
)

_LENGTH_RULES = {
    "title": ("Title", TITLE_LENGTH),
    "author": ("Author", AUTHOR_LENGTH),
    "genre": ("Genre", GENRE_LENGTH),
}


def _clean_text(field: str, v: str | None) -> str:
    label, (minimum, maximum) = _LENGTH_RULES[field]
    if v is None or not is_valid_length(v, minimum, maximum):
        raise ValueError(f"{label} must be between {minimum} and {maximum} characters")
    return v.strip()


def _check_year(v: int | None) -> int:
    if v is None or not is_valid_published_year(v):
        raise ValueError(
            f"Published year must be between {MIN_PUBLISHED_YEAR} and {current_year()}"
        )
    return v


class BookBase(BaseModel):
    """
    Base schema with shared book fields.

    Text fields are trimmed before their length is checked and stored.
    """

    title: str = Field(
        ...,
        description="Book title (1-200 characters)",
        examples=["1984", "Pride and Prejudice"],
    )

    author: str = Field(
        ...,
        description="Author name (1-100 characters)",
        examples=["George Orwell"],
    )

    genre: str = Field(
        ...,
        description="Genre (1-50 characters)",
        examples=["Dystopian", "Fiction"],
    )

    published_year: int = Field(
        ...,
        description="Year of publication (1000 to the current year)",
        examples=[1949],
    )

    @field_validator("title", "author", "genre")
    @classmethod
    def text_must_fit(cls, v: str, info: ValidationInfo) -> str:
        return _clean_text(info.field_name, v)

    @field_validator("published_year")
    @classmethod
    def year_must_be_in_range(cls, v: int) -> int:
        """The upper bound moves with the calendar, so check per request."""
        return _check_year(v)


class BookCreate(BookBase):
    """
    Schema for creating a new book.

    The owner is the authenticated caller; it is never taken from the body.

    Example request body:
    {
        "title": "1984",
        "author": "George Orwell",
        "genre": "Dystopian",
        "published_year": 1949
    }
    """


class BookUpdate(BaseModel):
    """
    Schema for updating an existing book.

    Every field is optional. Fields absent from the body stay unchanged
    (model_dump(exclude_unset=True) only returns fields that were sent).
    A field that is sent must be valid, so an empty genre or a null title
    is rejected rather than ignored.
    """

    title: str | None = Field(default=None, description="Book title")
    author: str | None = Field(default=None, description="Author name")
    genre: str | None = Field(default=None, description="Genre")
    published_year: int | None = Field(default=None, description="Year of publication")

    @field_validator("title", "author", "genre")
    @classmethod
    def text_must_fit(cls, v: str | None, info: ValidationInfo) -> str:
        return _clean_text(info.field_name, v)

    @field_validator("published_year")
    @classmethod
    def year_must_be_in_range(cls, v: int | None) -> int:
        return _check_year(v)


class BookResponse(BaseModel):
    """
    Schema for book responses.

    Built from the stored record with model_validate(book). Output is not
    re-validated against the input rules.
    """

    id: str = Field(..., description="Unique identifier")
    title: str
    author: str
    genre: str
    published_year: int
    user_id: str = Field(..., description="Id of the user who owns the book")
    created_at: datetime | None = Field(None, description="When the book was created")
    updated_at: datetime | None = Field(None, description="When the book was last updated")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "0b7a4c36-5d1e-4e7d-8a0a-3c9d2f6b1e22",
                "title": "1984",
                "author": "George Orwell",
                "genre": "Dystopian",
                "published_year": 1949,
                "user_id": "6f1c2a1e-6c3b-4e0e-9f64-1b2f0d1c9a11",
                "created_at": "2024-01-15T10:30:00Z",
                "updated_at": "2024-01-15T10:30:00Z",
            }
        },
    )


class BookListResponse(BaseModel):
    """
    Schema for paginated book list responses.

    - total: Number of books matching the filters
    - page / per_page: The requested window
    - pages: ceil(total / per_page)
    - has_next_page / has_previous_page: Navigation hints
    """

    items: list[BookResponse] = Field(..., description="Books on this page")
    total: int = Field(..., ge=0, description="Total number of matching books")
    page: int = Field(..., ge=1, description="Current page number")
    per_page: int = Field(..., ge=1, description="Number of items per page")
    pages: int = Field(..., ge=0, description="Total number of pages")
    has_next_page: bool
    has_previous_page: bool

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "items": [],
                "total": 25,
                "page": 1,
                "per_page": 10,
                "pages": 3,
                "has_next_page": True,
                "has_previous_page": False,
            }
        },
    )
