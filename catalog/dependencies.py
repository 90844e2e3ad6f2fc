"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

Provided here:
- DbSession: per-request SQLAlchemy session
- Tokens / Passwords: the process-wide services built by
  create_app() and kept on app.state
- require_authentication: the auth gate for protected endpoints
- get_user_or_404: shared lookup helper
"""

import logging
from typing import Annotated

from fastapi import Depends, Header, Request
from fastapi.security.utils import get_authorization_scheme_param
from sqlalchemy import select
from sqlalchemy.orm import Session

from catalog.database import get_db
from catalog.exceptions import InvalidTokenError, NotFoundError, TokenMissingError
from catalog.models import User
from catalog.schemas.user import TokenClaims
from catalog.services.security import PasswordHasher
from catalog.services.tokens import TokenService

logger = logging.getLogger(__name__)

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
# Instead of writing:
#   def list_books(db: Session = Depends(get_db)):
# You can write:
#   def list_books(db: DbSession):

DbSession = Annotated[Session, Depends(get_db)]


# =============================================================================
# Application State
# =============================================================================
def get_token_service(request: Request) -> TokenService:
    """The token service shared by login (issuing) and the auth gate (verifying)."""
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


Tokens = Annotated[TokenService, Depends(get_token_service)]
Passwords = Annotated[PasswordHasher, Depends(get_password_hasher)]


# =============================================================================
# Auth Gate
# =============================================================================
def require_authentication(
    request: Request,
    tokens: Tokens,
    authorization: str | None = Header(
        default=None,
        description="Bearer access token: 'Bearer <token>'",
    ),
) -> TokenClaims:
    """
    Authenticate the request from its Authorization header.

    Outcomes:
    - Missing:   no header, or an empty one        -> TokenMissingError (401)
    - Malformed: not "Bearer <token>", bad signature,
                 or unparseable token               -> InvalidTokenError (401)
    - Expired:   valid signature, past expiry       -> TokenExpiredError (401)
    - Valid:     claims are stored on request.state.identity and returned

    This checks WHO is calling, not WHAT they may do: any valid token
    may act on any account or book.
    """
    if not authorization or not authorization.strip():
        logger.debug(f"Token missing for {request.method} {request.url.path}")
        raise TokenMissingError()

    scheme, token = get_authorization_scheme_param(authorization)
    if scheme.lower() != "bearer" or not token:
        logger.debug(f"Malformed Authorization header for {request.method} {request.url.path}")
        raise InvalidTokenError()

    claims = tokens.verify(token)
    request.state.identity = claims
    return claims


# Protected handlers declare: identity: Authenticated
Authenticated = Annotated[TokenClaims, Depends(require_authentication)]


# =============================================================================
# Lookup Helpers
# =============================================================================
def get_user_or_404(db: Session, user_id: int) -> User:
    """
    Get a user by ID or raise NotFoundError.

    Raises:
        NotFoundError: 404 if the user does not exist
    """
    stmt = select(User).where(User.id == user_id)
    user = db.execute(stmt).scalar_one_or_none()

    if user is None:
        raise NotFoundError("User not found")

    return user
