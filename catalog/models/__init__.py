"""
SQLAlchemy Models Package

This package contains all database models for the Catalog API.

Models:
- User: An account that can log in and receive access tokens
- Book: A catalog item identified by its ISBN

There is no relationship between the two: books are not owned by users.

Import all models here to:
1. Make them available as: from catalog.models import Book, User
2. Ensure Base.metadata knows every table before create_all()
"""

from catalog.models.book import Book
from catalog.models.user import User

__all__ = [
    "Book",
    "User",
]
