"""
Tests for book filtering and pagination.
"""

import pytest

from app.models import Book
from app.services.search import filter_books, paginate


def make_book(title="Book", author="Author", genre="Fiction") -> Book:
    return Book(title=title, author=author, genre=genre, published_year=2000, user_id="owner")


class TestFilterBooks:
    """Tests for filter_books."""

    def test_genre_is_case_insensitive_exact_match(self):
        books = [make_book(genre="Fiction"), make_book(genre="fiction"), make_book(genre="Drama")]

        result = filter_books(books, genre="Fiction")

        assert result == books[:2]

    def test_genre_does_not_match_substring(self):
        books = [make_book(genre="Science Fiction")]

        assert filter_books(books, genre="Fiction") == []

    def test_author_and_title_match_substring(self):
        books = [
            make_book(title="Animal Farm", author="George Orwell"),
            make_book(title="1984", author="George Orwell"),
            make_book(title="Emma", author="Jane Austen"),
        ]

        assert filter_books(books, author="orwell") == books[:2]
        assert filter_books(books, title="FARM") == books[:1]

    def test_filters_combine_with_and(self):
        books = [
            make_book(title="Animal Farm", author="George Orwell", genre="Fiction"),
            make_book(title="1984", author="George Orwell", genre="Dystopian"),
            make_book(title="Emma", author="Jane Austen", genre="Fiction"),
        ]

        result = filter_books(books, genre="fiction", author="orwell")

        assert result == books[:1]

    def test_absent_filters_are_no_ops(self):
        books = [make_book(), make_book(genre="Drama")]

        assert filter_books(books) == books
        assert filter_books(books, genre=None, author="", title=None) == books


class TestPaginate:
    """Tests for paginate."""

    @pytest.mark.parametrize("total", [0, 1, 9, 10, 11, 25])
    @pytest.mark.parametrize("per_page", [1, 3, 10])
    @pytest.mark.parametrize("page", [1, 2, 3, 5])
    def test_page_window_and_navigation(self, total, per_page, page):
        items = list(range(total))

        result = paginate(items, page, per_page)

        expected_len = max(0, min(per_page, total - (page - 1) * per_page))
        assert len(result.items) == expected_len
        assert result.items == items[(page - 1) * per_page:(page - 1) * per_page + per_page]
        assert result.has_next_page == (page * per_page < total)
        assert result.has_previous_page == (page > 1)
        assert result.total == total

    def test_total_pages_rounds_up(self):
        assert paginate(list(range(25)), 1, 10).total_pages == 3
        assert paginate(list(range(20)), 1, 10).total_pages == 2
        assert paginate([], 1, 10).total_pages == 0

    def test_page_past_the_end_is_empty(self):
        result = paginate(list(range(5)), 10, 10)

        assert result.items == []
        assert result.has_next_page is False
        assert result.has_previous_page is True

    @pytest.mark.parametrize("page,per_page", [(0, 10), (1, 0), (-1, 5)])
    def test_rejects_non_positive_values(self, page, per_page):
        with pytest.raises(ValueError):
            paginate([1, 2, 3], page, per_page)
