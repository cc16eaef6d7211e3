"""
pytest Fixtures for Bookstore API Tests

Every test gets its own temporary data directory. The record store
dependencies are overridden so the app reads and writes users.json and
books.json inside that directory, never the real data.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
# This disables rate limiting, sets a test secret key and a cheap bcrypt cost
import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["BCRYPT_ROUNDS"] = "4"

from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_books_store, get_users_store
from app.main import app
from app.models import Book, User
from app.services.security import create_access_token, hash_password
from app.services.store import RecordStore


# =============================================================================
# STORAGE FIXTURES
# =============================================================================
@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture
def users_store(data_dir: Path) -> RecordStore[User]:
    return RecordStore(data_dir / "users.json", "users", User)


@pytest.fixture
def books_store(data_dir: Path) -> RecordStore[Book]:
    return RecordStore(data_dir / "books.json", "books", Book)


@pytest.fixture
def client(
    users_store: RecordStore[User],
    books_store: RecordStore[Book],
) -> Generator[TestClient, None, None]:
    """
    Create a test client bound to the temporary documents.

    We override the store dependencies to use the test stores.
    """
    app.dependency_overrides[get_users_store] = lambda: users_store
    app.dependency_overrides[get_books_store] = lambda: books_store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
@pytest.fixture
def sample_user(users_store: RecordStore[User]) -> User:
    """Create a sample user (password: abc123)."""
    return users_store.insert(
        User(
            username="testuser",
            email="testuser@example.com",
            hashed_password=hash_password("abc123"),
        )
    )


@pytest.fixture
def second_user(users_store: RecordStore[User]) -> User:
    """Create a second user for testing ownership scenarios."""
    return users_store.insert(
        User(
            username="seconduser",
            email="seconduser@example.com",
            hashed_password=hash_password("xyz789"),
        )
    )


@pytest.fixture
def auth_headers(sample_user: User) -> dict[str, str]:
    token = create_access_token(sample_user.id, sample_user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def second_auth_headers(second_user: User) -> dict[str, str]:
    token = create_access_token(second_user.id, second_user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def sample_book(books_store: RecordStore[Book], sample_user: User) -> Book:
    """Create a book owned by sample_user."""
    return books_store.insert(
        Book(
            title="1984",
            author="George Orwell",
            genre="Dystopian",
            published_year=1949,
            user_id=sample_user.id,
        )
    )


@pytest.fixture
def multiple_books(books_store: RecordStore[Book], sample_user: User) -> list[Book]:
    """Create 15 books for pagination and filtering tests."""
    genres = ["Fiction", "fiction", "Drama"]
    books = [
        Book(
            title=f"Test Book {i + 1}",
            author="George Orwell" if i % 2 == 0 else "Jane Austen",
            genre=genres[i % 3],
            published_year=1900 + i,
            user_id=sample_user.id,
        )
        for i in range(15)
    ]
    books_store.save(books)
    return books
