"""
Services Package

This package contains business logic that is:
- Separate from HTTP handling (routers)
- Reusable across different parts of the application
- Easier to test in isolation

Current services:
- rate_limiter.py: Rate limiting with slowapi
- search.py: Book filtering and pagination
- security.py: Password hashing and JWT utilities
- store.py: Record stores over the JSON documents
- validation.py: Field-level input rules
"""
