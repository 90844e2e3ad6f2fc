"""
Services Package

Business logic that is separate from HTTP handling (routers) and easy to
test in isolation.

Current services:
- security.py: Password hashing and verification (bcrypt via passlib)
- tokens.py: JWT access token issuing and verification (python-jose)
"""

from catalog.services.security import PasswordHasher
from catalog.services.tokens import TokenService

__all__ = [
    "PasswordHasher",
    "TokenService",
]
