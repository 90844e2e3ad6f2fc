"""
API Routers Package

Router Structure:
- auth.py: /auth/* endpoints (login, current identity)
- users.py: /users/* endpoints (account management)
- books.py: /books/* endpoints (catalog CRUD and search)

Each router is imported and registered in main.py.
"""

from catalog.routers.auth import router as auth_router
from catalog.routers.books import router as books_router
from catalog.routers.users import router as users_router

__all__ = [
    "auth_router",
    "books_router",
    "users_router",
]
