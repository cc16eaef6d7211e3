"""
API Routers Package

This package contains FastAPI routers that handle API endpoints.

Router Structure:
- auth.py: /api/v1/auth/* endpoints (registration, login, logout, me)
- users.py: /api/v1/users/* endpoints (profile management)
- books.py: /api/v1/books/* endpoints (CRUD, filtering, pagination)

Each router is imported and registered in main.py.
"""

from app.routers.auth import router as auth_router
from app.routers.books import router as books_router
from app.routers.users import router as users_router

__all__ = [
    "auth_router",
    "books_router",
    "users_router",
]
