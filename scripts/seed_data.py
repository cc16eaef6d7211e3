#!/usr/bin/env python3
"""
Database Seed Script

Populates the JSON documents with sample data for development and testing.

USAGE:
    # From the project root with venv activated
    python scripts/seed_data.py

This script:
1. Resolves the document paths from app settings
2. Clears existing users and books (optional)
3. Creates a demo user (demo@example.com / demo123)
4. Creates sample books owned by the demo user
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.config import get_settings
from app.models import Book, User
from app.services.security import hash_password
from app.services.store import RecordStore

DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "demo123"

BOOKS_DATA = [
    {"title": "1984", "author": "George Orwell", "genre": "Dystopian", "published_year": 1949},
    {"title": "Animal Farm", "author": "George Orwell", "genre": "Fiction", "published_year": 1945},
    {"title": "Pride and Prejudice", "author": "Jane Austen", "genre": "Romance", "published_year": 1813},
    {"title": "Emma", "author": "Jane Austen", "genre": "Romance", "published_year": 1815},
    {"title": "The Old Man and the Sea", "author": "Ernest Hemingway", "genre": "Fiction", "published_year": 1952},
    {"title": "Murder on the Orient Express", "author": "Agatha Christie", "genre": "Mystery", "published_year": 1934},
    {"title": "Foundation", "author": "Isaac Asimov", "genre": "Science Fiction", "published_year": 1951},
    {"title": "I, Robot", "author": "Isaac Asimov", "genre": "Science Fiction", "published_year": 1950},
    {"title": "The Hobbit", "author": "J.R.R. Tolkien", "genre": "Fantasy", "published_year": 1937},
]


def create_demo_user(users: RecordStore[User]) -> User:
    """Create the demo user, or return it if it already exists."""
    existing = users.find_one(lambda u: u.matches_email(DEMO_EMAIL))
    if existing is not None:
        print("Demo user already exists.")
        return existing

    print("Creating demo user...")
    return users.insert(
        User(
            username="demo",
            email=DEMO_EMAIL,
            hashed_password=hash_password(DEMO_PASSWORD),
        )
    )


def create_books(books: RecordStore[Book], owner: User) -> list[Book]:
    """Create the sample books owned by owner."""
    print("Creating books...")
    created = [Book(**data, user_id=owner.id) for data in BOOKS_DATA]

    with books.transaction() as records:
        records.extend(created)

    print(f"Created {len(created)} books.")
    return created


def seed_database(
    users: RecordStore[User],
    books: RecordStore[Book],
    clear_existing: bool = True,
) -> list[Book]:
    """
    Seed both documents.

    Args:
        users: Store for users.json
        books: Store for books.json
        clear_existing: If True, empties both documents first.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    if clear_existing:
        print("Clearing existing data...")
        users.save([])
        books.save([])

    owner = create_demo_user(users)
    created = create_books(books, owner)

    print("=" * 60)
    print("Database seeding completed successfully!")
    print("=" * 60)
    print(f"\nLogin with {DEMO_EMAIL} / {DEMO_PASSWORD}")

    return created


if __name__ == "__main__":
    settings = get_settings()
    seed_database(
        RecordStore(settings.users_path, "users", User),
        RecordStore(settings.books_path, "books", Book),
    )
    print(f"API documentation at {settings.base_url}/docs")
