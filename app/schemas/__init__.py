"""
Pydantic Schemas Package

This package contains Pydantic models for request/response validation.

WHY Separate Schemas from Record Models?
========================================
1. Security: Control exactly what data is exposed in API responses
   (the password hash never leaves the server)
2. Validation: Different rules for create vs update vs response
3. Documentation: Schemas generate OpenAPI documentation

Schema Naming Convention:
- XxxCreate: Fields required when creating a new record
- XxxUpdate: Fields allowed when updating (all optional)
- XxxResponse: Fields returned in API responses
"""

from app.schemas.book import (
    BookBase,
    BookCreate,
    BookListResponse,
    BookResponse,
    BookUpdate,
)
from app.schemas.user import (
    LoginRequest,
    TokenResponse,
    UserCreate,
    UserListResponse,
    UserResponse,
    UserUpdate,
)

__all__ = [
    # Book schemas
    "BookBase",
    "BookCreate",
    "BookListResponse",
    "BookResponse",
    "BookUpdate",
    # User schemas
    "LoginRequest",
    "TokenResponse",
    "UserCreate",
    "UserListResponse",
    "UserResponse",
    "UserUpdate",
]
