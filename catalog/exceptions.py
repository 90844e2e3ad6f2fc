"""
Application Exceptions

Every failure a handler can produce maps to one of these classes.
The exception handlers registered in main.py turn them into JSON
responses of the form {"error": "<message>"}.

Taxonomy:
=========
- AuthenticationError (401)
    - TokenMissingError: no Authorization header
    - InvalidTokenError: bad signature, bad structure, wrong scheme
    - TokenExpiredError: valid signature but past expiry
    - InvalidCredentialsError: login with wrong handle or password
- NotFoundError (404): the addressed record does not exist
- ValidationError (400): constraint violation or storage failure,
  always with a generic per-operation message
"""

from fastapi import status


class CatalogError(Exception):
    """Base class for errors that are rendered as HTTP responses."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    message: str = "Request failed"
    headers: dict[str, str] | None = None

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


# =============================================================================
# Authentication
# =============================================================================
class AuthenticationError(CatalogError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Authentication failed"
    headers = {"WWW-Authenticate": "Bearer"}


class TokenMissingError(AuthenticationError):
    message = "Authentication failed: Token missing"


class InvalidTokenError(AuthenticationError):
    message = "Authentication failed: Invalid token"


class TokenExpiredError(AuthenticationError):
    message = "Authentication failed: Token expired"


class InvalidCredentialsError(AuthenticationError):
    message = "Invalid username or password"


# =============================================================================
# Resource Errors
# =============================================================================
class NotFoundError(CatalogError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class ValidationError(CatalogError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


# =============================================================================
# Per-operation failure messages
# =============================================================================
# Keyed by route name (the endpoint function name). Used when a request
# fails body/path validation or hits a storage error, so the caller gets
# the same generic message regardless of the underlying cause.
FAILURE_MESSAGES: dict[str, str] = {
    "login": "Login failed",
    "get_me": "Failed to read identity",
    "create_user": "Failed to create user",
    "update_password": "Failed to update password",
    "delete_user": "Failed to delete user",
    "list_books": "Failed to list books",
    "search_books": "Failed to search books",
    "get_book": "Failed to get book",
    "create_book": "Failed to create book",
    "update_book": "Failed to update book",
    "delete_book": "Failed to delete book",
}


def failure_message(route_name: str | None) -> str:
    """Return the generic failure message for a route, or a default."""
    if route_name is None:
        return ValidationError.message
    return FAILURE_MESSAGES.get(route_name, ValidationError.message)
