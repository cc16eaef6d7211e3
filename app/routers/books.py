"""
Books Router

CRUD endpoints for books, plus filtering and pagination.

Endpoints:
- GET /books - List books (genre/author/title filters, page/limit)
- GET /books/search/{genre} - Books in one genre
- GET /books/{book_id} - One book
- POST /books - Create a book owned by the caller
- PUT /books/{book_id} - Update a book (owner only)
- DELETE /books/{book_id} - Delete a book (owner only)

Business Rules:
- Anyone can read; writing requires authentication
- Only the user who created a book may change or delete it
"""

import logging

from fastapi import APIRouter, HTTPException, Request, status

from app.config import get_settings
from app.dependencies import BookFilters, BooksStore, CurrentUser, Pagination
from app.models import Book
from app.schemas import (
    BookCreate,
    BookListResponse,
    BookResponse,
    BookUpdate,
)
from app.services.rate_limiter import limiter
from app.services.search import Page, filter_books, paginate
from app.services.security import TokenPayload
from app.services.store import index_of

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        404: {"description": "Book not found"},
    },
)


# =============================================================================
# Helper Functions
# =============================================================================
def book_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Book not found",
    )


def locate_owned_book(
    records: list[Book],
    book_id: str,
    current_user: TokenPayload,
    action: str,
) -> int:
    """
    Find a book's index and check the caller owns it.

    Raises:
        HTTPException: 404 if the book does not exist
        HTTPException: 403 if it belongs to another user
    """
    index = index_of(records, lambda b: b.id == book_id)
    if index == -1:
        raise book_not_found()

    if not records[index].is_owned_by(current_user.user_id):
        logger.warning(
            f"User {current_user.user_id} tried to {action} book {book_id}"
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"You can only {action} your own books",
        )

    return index


def to_list_response(page: Page[Book]) -> BookListResponse:
    return BookListResponse(
        items=[BookResponse.model_validate(book) for book in page.items],
        total=page.total,
        page=page.page,
        per_page=page.per_page,
        pages=page.total_pages,
        has_next_page=page.has_next_page,
        has_previous_page=page.has_previous_page,
    )


# =============================================================================
# Read Endpoints
# =============================================================================
@router.get(
    "",
    response_model=BookListResponse,
    summary="List books",
    description="Paginated list of books with optional genre, author and title filters.",
)
@limiter.limit(settings.rate_limit_default)
def list_books(
    request: Request,
    books: BooksStore,
    pagination: Pagination,
    filters: BookFilters,
) -> BookListResponse:
    """
    List books in insertion order.

    Examples:
        GET /api/v1/books?genre=fiction
        GET /api/v1/books?author=orwell&title=farm&page=2&limit=5
    """
    records = books.find_all()
    if filters.has_filters:
        records = filter_books(
            records,
            genre=filters.genre,
            author=filters.author,
            title=filters.title,
        )

    return to_list_response(paginate(records, pagination.page, pagination.per_page))


@router.get(
    "/search/{genre}",
    response_model=BookListResponse,
    summary="Books by genre",
    description="Paginated list of books in a genre (case-insensitive).",
)
@limiter.limit(settings.rate_limit_default)
def search_books_by_genre(
    request: Request,
    genre: str,
    books: BooksStore,
    pagination: Pagination,
) -> BookListResponse:
    records = filter_books(books.find_all(), genre=genre)
    return to_list_response(paginate(records, pagination.page, pagination.per_page))


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    summary="Get a book by ID",
)
@limiter.limit(settings.rate_limit_default)
def get_book(
    request: Request,
    book_id: str,
    books: BooksStore,
) -> BookResponse:
    book = books.find_one(lambda b: b.id == book_id)
    if book is None:
        raise book_not_found()

    return BookResponse.model_validate(book)


# =============================================================================
# Write Endpoints
# =============================================================================
@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new book",
    description="Create a book owned by the authenticated user.",
)
@limiter.limit(settings.rate_limit_write)
def create_book(
    request: Request,
    book_data: BookCreate,
    books: BooksStore,
    current_user: CurrentUser,
) -> BookResponse:
    book = Book(**book_data.model_dump(), user_id=current_user.user_id)
    books.insert(book)

    logger.info(f"Book {book.id} created by {current_user.user_id}")

    return BookResponse.model_validate(book)


@router.put(
    "/{book_id}",
    response_model=BookResponse,
    summary="Update a book",
    description="Update fields of a book you own. Omitted fields are unchanged.",
)
@limiter.limit(settings.rate_limit_write)
def update_book(
    request: Request,
    book_id: str,
    book_data: BookUpdate,
    books: BooksStore,
    current_user: CurrentUser,
) -> BookResponse:
    """
    Update an existing book.

    Only fields present in the request body are written
    (model_dump(exclude_unset=True)).

    Raises:
        HTTPException: 404 if the book does not exist
        HTTPException: 403 if the caller does not own it
    """
    update_data = book_data.model_dump(exclude_unset=True)

    with books.lock:
        index = locate_owned_book(books.load(), book_id, current_user, "update")
        updated = books.update_at(index, update_data)

    logger.info(f"Book {book_id} updated by {current_user.user_id}")

    return BookResponse.model_validate(updated)


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a book",
    description="Permanently delete a book you own.",
)
@limiter.limit(settings.rate_limit_write)
def delete_book(
    request: Request,
    book_id: str,
    books: BooksStore,
    current_user: CurrentUser,
) -> None:
    with books.lock:
        index = locate_owned_book(books.load(), book_id, current_user, "delete")
        books.remove_at(index)

    logger.info(f"Book {book_id} deleted by {current_user.user_id}")
