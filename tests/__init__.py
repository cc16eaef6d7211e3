"""
Test Suite for the Bookstore API

Test Organization:
- conftest.py: Shared fixtures (temporary documents, client, sample data)
- test_storage.py: JSON document gateway and record store
- test_validation.py: Field-level input rules
- test_search.py: Filtering and pagination
- test_security.py: Password hashing and JWT tokens
- test_auth.py: /api/v1/auth endpoints
- test_users.py: /api/v1/users endpoints
- test_books.py: /api/v1/books endpoints
- test_main.py: Health, root and error handling
- test_seed_data.py: Seed script

Running Tests:
    pytest
    pytest tests/test_books.py
    pytest -v
"""
