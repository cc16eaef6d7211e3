"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

Common Dependency Patterns used here:
- Record stores (one per JSON document)
- Authentication (bearer header or login cookie)
- Pagination parameters
- Book search filters
"""

from typing import Annotated

from fastapi import Cookie, Depends, HTTPException, Query, status
from fastapi.security import OAuth2PasswordBearer

from app.config import get_settings
from app.models import Book, User
from app.services.security import InvalidTokenError, TokenPayload, decode_access_token
from app.services.store import RecordStore

settings = get_settings()


# =============================================================================
# Record Stores
# =============================================================================
# Tests override these with app.dependency_overrides to point the stores
# at a temporary directory.

def get_users_store() -> RecordStore[User]:
    """Record store for users.json."""
    return RecordStore(settings.users_path, "users", User)


def get_books_store() -> RecordStore[Book]:
    """Record store for books.json."""
    return RecordStore(settings.books_path, "books", Book)


UsersStore = Annotated[RecordStore[User], Depends(get_users_store)]
BooksStore = Annotated[RecordStore[Book], Depends(get_books_store)]


# =============================================================================
# Pagination Parameters
# =============================================================================
class PaginationParams:
    """
    Common pagination parameters for list endpoints.

    - page: Which page to return (1-indexed)
    - limit: How many items per page

    Values below 1 are rejected with 422.

    Usage in route:
        @router.get("/books")
        def list_books(pagination: Pagination):
            page = paginate(books, pagination.page, pagination.per_page)
    """

    def __init__(
        self,
        page: int = Query(
            default=1,
            ge=1,
            description="Page number (1-indexed)",
            examples=[1, 2, 3],
        ),
        limit: int = Query(
            default=10,
            ge=1,
            description="Number of items per page",
            examples=[10, 25, 50],
        ),
    ) -> None:
        self.page = page
        self.per_page = limit


Pagination = Annotated[PaginationParams, Depends()]


# =============================================================================
# Book Search Filters
# =============================================================================
class BookSearchParams:
    """
    Filter parameters for GET /books.

    - genre: exact match, case-insensitive
    - author: partial match, case-insensitive
    - title: partial match, case-insensitive

    All parameters are optional and combine with AND.

    Usage:
        GET /api/v1/books?genre=fiction&author=orwell&page=2&limit=5
    """

    def __init__(
        self,
        genre: str | None = Query(
            default=None,
            description="Filter by genre (exact match, case-insensitive)",
            examples=["Fiction"],
        ),
        author: str | None = Query(
            default=None,
            description="Filter by author (partial match, case-insensitive)",
            examples=["orwell"],
        ),
        title: str | None = Query(
            default=None,
            description="Filter by title (partial match, case-insensitive)",
            examples=["farm"],
        ),
    ) -> None:
        self.genre = genre
        self.author = author
        self.title = title

    @property
    def has_filters(self) -> bool:
        """Check if any filters are applied."""
        return any([self.genre, self.author, self.title])


BookFilters = Annotated[BookSearchParams, Depends()]


# =============================================================================
# JWT Authentication
# =============================================================================
# The token is read from the "Authorization: Bearer <token>" header or,
# failing that, from the cookie set at login.
#
# Rejections:
# - No token at all -> 401
# - Token present but invalid or expired -> 403

oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"/api/{settings.api_version}/auth/login",
    auto_error=False,
)


def get_token(
    bearer_token: str | None = Depends(oauth2_scheme),
    cookie_token: str | None = Cookie(default=None, alias=settings.token_cookie_name),
) -> str | None:
    """Return the presented access token, header first, or None."""
    return bearer_token or cookie_token


def get_current_user(token: str | None = Depends(get_token)) -> TokenPayload:
    """
    Validate the presented token and return the caller's identity.

    Raises:
        HTTPException: 401 if no token was presented
        HTTPException: 403 if the token is invalid or expired
    """
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="You should sign in first",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return decode_access_token(token)
    except InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Token is not valid",
        )


CurrentUser = Annotated[TokenPayload, Depends(get_current_user)]
