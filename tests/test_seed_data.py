"""
Tests for the development seed script.
"""

from app.services.security import verify_password
from scripts.seed_data import BOOKS_DATA, DEMO_EMAIL, DEMO_PASSWORD, seed_database


class TestSeedData:
    def test_seed_creates_demo_user_and_books(self, users_store, books_store):
        created = seed_database(users_store, books_store)

        users = users_store.find_all()
        assert len(users) == 1
        assert users[0].email == DEMO_EMAIL
        assert verify_password(DEMO_PASSWORD, users[0].hashed_password)

        books = books_store.find_all()
        assert len(books) == len(BOOKS_DATA) == len(created)
        assert all(book.user_id == users[0].id for book in books)

    def test_reseed_clears_existing_data(self, users_store, books_store, sample_book):
        seed_database(users_store, books_store)
        seed_database(users_store, books_store)

        assert len(users_store.find_all()) == 1
        assert len(books_store.find_all()) == len(BOOKS_DATA)
        assert books_store.find_one(lambda b: b.id == sample_book.id) is None

    def test_seed_without_clearing_reuses_demo_user(self, users_store, books_store):
        seed_database(users_store, books_store)

        seed_database(users_store, books_store, clear_existing=False)

        assert len(users_store.find_all()) == 1
        assert len(books_store.find_all()) == 2 * len(BOOKS_DATA)
