"""
Pydantic Schemas Package

This package contains Pydantic models for request/response validation.

Schema Naming Convention:
- XxxCreate: Fields required when creating a new record
- XxxUpdate: Fields allowed when updating (all optional, unknown fields rejected)
- XxxResponse: Fields returned in API responses
"""

from catalog.schemas.book import (
    BookBase,
    BookCreate,
    BookResponse,
    BookUpdate,
)
from catalog.schemas.common import MessageResponse
from catalog.schemas.user import (
    LoginRequest,
    PasswordUpdate,
    TokenClaims,
    TokenResponse,
    UserCreate,
    UserResponse,
)

__all__ = [
    # Book schemas
    "BookBase",
    "BookCreate",
    "BookUpdate",
    "BookResponse",
    # User schemas
    "UserCreate",
    "UserResponse",
    "PasswordUpdate",
    # Auth/Token schemas
    "LoginRequest",
    "TokenResponse",
    "TokenClaims",
    # Shared
    "MessageResponse",
]
