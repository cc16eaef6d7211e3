"""
Book Search Service

Filtering and pagination over an in-memory list of books.

Filters:
========
- genre: case-insensitive exact match
- author: case-insensitive substring match
- title: case-insensitive substring match

Filters combine with AND. A filter that is None (or empty) is ignored.

Pagination:
===========
Pages are 1-indexed. For page p and page size n the window is
[(p - 1) * n, (p - 1) * n + n) over the filtered list. A page past the
last one is empty rather than an error.

Usage:
    matches = filter_books(books, genre="fiction", author="orwell")
    page = paginate(matches, page=2, per_page=10)
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from app.models import Book

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the metadata describing it."""

    items: list[T]
    page: int
    per_page: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.per_page)

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.page > 1


def filter_books(
    books: Sequence[Book],
    genre: str | None = None,
    author: str | None = None,
    title: str | None = None,
) -> list[Book]:
    """
    Apply the genre, author and title filters to a list of books.

    Order of the input is preserved.
    """
    filtered = list(books)

    if genre:
        genre = genre.lower()
        filtered = [book for book in filtered if book.genre.lower() == genre]

    if author:
        author = author.lower()
        filtered = [book for book in filtered if author in book.author.lower()]

    if title:
        title = title.lower()
        filtered = [book for book in filtered if title in book.title.lower()]

    return filtered


def paginate(items: Sequence[T], page: int, per_page: int) -> Page[T]:
    """
    Slice a sequence into one page.

    Raises:
        ValueError: If page or per_page is less than 1
    """
    if page < 1 or per_page < 1:
        raise ValueError("Page and limit must be positive numbers")

    start = (page - 1) * per_page
    return Page(
        items=list(items[start:start + per_page]),
        page=page,
        per_page=per_page,
        total=len(items),
    )
