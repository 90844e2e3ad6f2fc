"""
Authentication Router

Handles authentication endpoints:
- Login (username/password -> JWT access token)
- Get current identity (from JWT token)

Security:
=========
- Passwords are checked against bcrypt hashes; plain text is never logged
- Unknown usernames and wrong passwords get the same 401 response
- Access tokens are short-lived (ACCESS_TOKEN_EXPIRE_MINUTES, 60 by default)
- There are no refresh tokens: log in again when the token expires
"""

import logging

from fastapi import APIRouter
from sqlalchemy import select

from catalog.database import storage_errors
from catalog.dependencies import Authenticated, DbSession, Passwords, Tokens
from catalog.exceptions import InvalidCredentialsError, failure_message
from catalog.models import User
from catalog.schemas.user import LoginRequest, TokenClaims, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
    responses={
        400: {"description": "Bad request"},
        401: {"description": "Unauthorized"},
    },
)


# -------------------------------------------------------------------------
# Login Endpoint
# -------------------------------------------------------------------------
@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login with username and password",
    description="""
    Authenticate with username and password to receive an access token.

    **Returns:**
    - `token`: Signed JWT for API authentication
    - `token_type`: Always "bearer"
    - `expires_in`: Token lifetime in seconds

    **Usage:**
    Include the token in the Authorization header:
    ```
    Authorization: Bearer <token>
    ```
    """,
)
def login(
    credentials: LoginRequest,
    db: DbSession,
    tokens: Tokens,
    passwords: Passwords,
) -> TokenResponse:
    """
    Verify the credentials and issue an access token.

    The token is the only output of a successful login; nothing is
    written to the database.
    """
    username = credentials.username.lower()

    with storage_errors(db, failure_message("login")):
        stmt = select(User).where(User.username == username)
        user = db.execute(stmt).scalar_one_or_none()

    if user is None:
        # Keep timing comparable to a real password check
        passwords.dummy_verify()
        logger.warning(f"Login failed: user not found for {username}")
        raise InvalidCredentialsError()

    if not passwords.verify(credentials.password, user.hashed_password):
        logger.warning(f"Login failed: incorrect password for {username}")
        raise InvalidCredentialsError()

    token = tokens.issue(user.id)

    logger.info(f"User logged in: {username}")

    return TokenResponse(
        token=token,
        token_type="bearer",
        expires_in=tokens.lifetime_seconds,
    )


# -------------------------------------------------------------------------
# Current Identity Endpoint
# -------------------------------------------------------------------------
@router.get(
    "/me",
    response_model=TokenClaims,
    summary="Get current identity",
    description="""
    Return the identity asserted by the access token.

    Requires a valid access token in the Authorization header:
    ```
    Authorization: Bearer <token>
    ```

    The account is not looked up: a token for a deleted account keeps
    working here until it expires.
    """,
)
def get_me(identity: Authenticated) -> TokenClaims:
    return identity
