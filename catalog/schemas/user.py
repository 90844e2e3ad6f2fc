"""
User Pydantic Schemas

These schemas define the shape of data for account and authentication
operations.

Schemas:
- UserCreate: Account creation data (username, display name, password)
- UserResponse: Account data returned to clients (never exposes the hash)
- PasswordUpdate: Body of the password change endpoint
- LoginRequest / TokenResponse: Login exchange
- TokenClaims: The identity carried by a verified access token
"""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

# bcrypt only uses the first 72 bytes of its input and cannot take NUL
# bytes. Such passwords are rejected here, and PasswordHasher.verify refuses
# them too, so two different passwords can never verify the same hash.
MAX_PASSWORD_BYTES = 72


def _check_password(v: str) -> str:
    if "\x00" in v:
        raise ValueError("Password must not contain NUL characters")
    if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return v


class UserCreate(BaseModel):
    """
    Schema for account creation.

    Example request body:
    {
        "username": "alice",
        "display_name": "Alice",
        "password": "s3cret!"
    }
    """

    username: str = Field(
        ...,
        min_length=3,
        max_length=50,
        description="Unique username (3-50 characters, alphanumeric and underscores)",
        examples=["alice", "jane_doe123"],
    )

    display_name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Name shown to other people",
        examples=["Alice"],
    )

    password: str = Field(
        ...,
        min_length=1,
        description="Plain text password, hashed before storage",
        examples=["s3cret!"],
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("username")
    @classmethod
    def username_must_be_valid(cls, v: str) -> str:
        """
        Validate username format.

        Rules:
        - Only alphanumeric and underscores
        - Must start with a letter
        """
        if not re.match(r"^[a-zA-Z][a-zA-Z0-9_]*$", v):
            raise ValueError(
                "Username must start with a letter and contain only "
                "letters, numbers, and underscores"
            )
        return v.lower()  # Normalize to lowercase

    @field_validator("display_name")
    @classmethod
    def display_name_must_not_be_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Display name cannot be empty or whitespace")
        return v.strip()

    @field_validator("password")
    @classmethod
    def password_must_fit_bcrypt(cls, v: str) -> str:
        return _check_password(v)


class UserResponse(BaseModel):
    """
    Schema for account responses.

    SECURITY: Never includes the password hash.
    """

    id: int = Field(..., description="Unique account identifier", examples=[1, 42])
    username: str = Field(..., description="Unique username")
    display_name: str = Field(..., description="Name shown to other people")
    created_at: datetime = Field(..., description="When the account was created")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "username": "alice",
                "display_name": "Alice",
                "created_at": "2024-01-15T10:30:00Z",
            }
        },
    )


class PasswordUpdate(BaseModel):
    """Schema for the password change request."""

    password: str = Field(
        ...,
        min_length=1,
        description="New password",
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("password")
    @classmethod
    def password_must_fit_bcrypt(cls, v: str) -> str:
        return _check_password(v)


# =============================================================================
# Authentication Schemas
# =============================================================================
class LoginRequest(BaseModel):
    """Credentials exchanged for an access token."""

    username: str = Field(..., min_length=1, max_length=50, examples=["alice"])
    password: str = Field(..., min_length=1, examples=["s3cret!"])


class TokenResponse(BaseModel):
    """
    Access token returned by a successful login.

    Send it back as:
        Authorization: Bearer <token>
    """

    token: str = Field(..., description="Signed JWT access token")
    token_type: str = Field(default="bearer", description="Always 'bearer'")
    expires_in: int = Field(..., description="Token lifetime in seconds")


class TokenClaims(BaseModel):
    """Identity asserted by a verified access token."""

    account_id: int = Field(..., description="Account the token was issued to")
    issued_at: datetime = Field(..., description="When the token was issued")
    expires_at: datetime = Field(..., description="When the token stops being valid")

    model_config = ConfigDict(frozen=True)
