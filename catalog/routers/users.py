"""
Users Router

Account management endpoints. All of them require a valid access token.

Endpoints:
- POST /users - Create an account
- PUT /users/{user_id}/password - Set a new password
- DELETE /users/{user_id} - Delete an account

Business Rules:
- Usernames are unique (case-insensitive, stored lowercase)
- Every password assignment stores a freshly salted hash
- Any authenticated caller may manage any account; there is no
  ownership check
"""

import logging

from fastapi import APIRouter, status
from sqlalchemy import select

from catalog.database import storage_errors
from catalog.dependencies import (
    Authenticated,
    DbSession,
    Passwords,
    get_user_or_404,
)
from catalog.exceptions import ValidationError, failure_message
from catalog.models import User
from catalog.schemas import MessageResponse, PasswordUpdate, UserCreate, UserResponse

logger = logging.getLogger(__name__)

# =============================================================================
# Router Configuration
# =============================================================================

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    responses={
        400: {"description": "Invalid request"},
        401: {"description": "Not authenticated"},
        404: {"description": "User not found"},
    },
)


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
    description="Create a new account. Requires an access token.",
)
def create_user(
    user_data: UserCreate,
    db: DbSession,
    passwords: Passwords,
    identity: Authenticated,
) -> UserResponse:
    """
    Create a new account.

    1. Validates username format (handled by Pydantic)
    2. Rejects a username that is already taken
    3. Hashes the password with bcrypt
    4. Returns the account (without password)
    """
    message = failure_message("create_user")

    with storage_errors(db, message):
        stmt = select(User).where(User.username == user_data.username)
        existing = db.execute(stmt).scalar_one_or_none()

        if existing:
            logger.info(f"Rejected duplicate username: {user_data.username}")
            raise ValidationError(message)

        user = User(
            username=user_data.username,
            display_name=user_data.display_name,
            hashed_password=passwords.hash(user_data.password),
        )

        db.add(user)
        db.commit()
        db.refresh(user)

    logger.info(f"User {user.id} ({user.username}) created by account {identity.account_id}")

    return UserResponse.model_validate(user)


@router.put(
    "/{user_id}/password",
    response_model=MessageResponse,
    summary="Change password",
    description="Replace an account's password. Requires an access token.",
)
def update_password(
    user_id: int,
    password_data: PasswordUpdate,
    db: DbSession,
    passwords: Passwords,
    identity: Authenticated,
) -> MessageResponse:
    """
    Set a new password for an account.

    The old password is not required; outstanding tokens for the
    account remain valid until they expire.
    """
    with storage_errors(db, failure_message("update_password")):
        user = get_user_or_404(db, user_id)
        user.hashed_password = passwords.hash(password_data.password)
        db.commit()

    logger.info(f"Password changed for user {user_id} by account {identity.account_id}")

    return MessageResponse(message="Password updated successfully")


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    summary="Delete an account",
    description="Permanently delete an account. Requires an access token.",
)
def delete_user(
    user_id: int,
    db: DbSession,
    identity: Authenticated,
) -> MessageResponse:
    with storage_errors(db, failure_message("delete_user")):
        user = get_user_or_404(db, user_id)
        db.delete(user)
        db.commit()

    logger.info(f"User {user_id} deleted by account {identity.account_id}")

    return MessageResponse(message="User deleted successfully")
