"""
Bookstore API Application Package

A REST API for users and books, persisted as JSON documents.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: Reading and writing the JSON documents
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions
- models/: Stored record models (users, books)
- schemas/: Pydantic request/response schemas
- routers/: API route handlers
- services/: Record stores, security, search, validation, rate limiting
"""

__version__ = "0.1.0"
