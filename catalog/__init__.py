"""
Catalog API Application Package

A small book catalog backend with token-based authentication.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine, session management and storage error mapping
- exceptions.py: Error taxonomy and its HTTP mapping
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions (db session, auth gate)
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas
- routers/: API route handlers
- services/: Password hashing and JWT tokens
"""

__version__ = "0.1.0"
