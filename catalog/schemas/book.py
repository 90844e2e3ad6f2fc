"""
Book Pydantic Schemas

Handles:
- ISBN validation and normalization
- Price validation (non-negative, two decimals)
- An explicit update shape: only the listed fields can be changed
"""

import re
from datetime import datetime
from decimal import Decimal
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def normalize_isbn(v: str) -> str:
    """
    Validate an ISBN and strip hyphens and spaces.

    Accepts:
    - ISBN-10: 9 digits followed by a digit or X
    - ISBN-13: 13 digits
    """
    cleaned = re.sub(r"[-\s]", "", v).upper()

    if len(cleaned) == 10:
        if not re.match(r"^\d{9}[\dX]$", cleaned):
            raise ValueError(
                "Invalid ISBN-10 format. Must be 10 characters: "
                "9 digits followed by a digit or 'X'"
            )
    elif len(cleaned) == 13:
        if not cleaned.isdigit():
            raise ValueError("Invalid ISBN-13 format. Must be exactly 13 digits")
    else:
        raise ValueError(
            "ISBN must be either 10 or 13 characters "
            "(excluding hyphens)"
        )

    return cleaned


def _strip_required(v: str, field: str) -> str:
    if not v.strip():
        raise ValueError(f"{field} cannot be empty or whitespace")
    return v.strip()


class BookBase(BaseModel):
    """Shared book fields."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Book title",
        examples=["1984", "Pride and Prejudice"],
    )

    author: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Author name",
        examples=["George Orwell"],
    )

    isbn: str = Field(
        ...,
        max_length=20,
        description="ISBN-10 or ISBN-13 (hyphens allowed, stripped for storage)",
        examples=["978-0451524935", "0-06-112008-1"],
    )

    description: str | None = Field(
        default=None,
        max_length=5000,
        description="Book description or summary",
    )

    price: Decimal = Field(
        ...,
        ge=0,  # free books allowed
        le=Decimal("99999999.99"),
        decimal_places=2,
        description="Book price in USD",
        examples=["12.99", "24.95"],
    )


class BookCreate(BookBase):
    """
    Schema for creating a new book.

    Example request body:
    {
        "title": "1984",
        "author": "George Orwell",
        "isbn": "978-0451524935",
        "price": "12.99"
    }
    """

    model_config = ConfigDict(extra="forbid")

    @field_validator("isbn")
    @classmethod
    def validate_isbn(cls, v: str) -> str:
        return normalize_isbn(v)

    @field_validator("title")
    @classmethod
    def title_must_not_be_empty(cls, v: str) -> str:
        return _strip_required(v, "Title")

    @field_validator("author")
    @classmethod
    def author_must_not_be_empty(cls, v: str) -> str:
        return _strip_required(v, "Author")


class BookUpdate(BaseModel):
    """
    Schema for updating an existing book.

    Every field is optional; only the fields present in the request body
    are applied. Unknown fields are rejected, and required columns cannot
    be cleared with null. description may be set to null to remove it.
    """

    title: str | None = Field(default=None, min_length=1, max_length=500)
    author: str | None = Field(default=None, min_length=1, max_length=255)
    isbn: str | None = Field(default=None, max_length=20)
    description: str | None = Field(default=None, max_length=5000)
    price: Decimal | None = Field(
        default=None,
        ge=0,
        le=Decimal("99999999.99"),
        decimal_places=2,
    )

    model_config = ConfigDict(extra="forbid")

    # Columns that are NOT NULL in the books table
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("title", "author", "isbn", "price")

    @field_validator("isbn")
    @classmethod
    def validate_isbn(cls, v: str | None) -> str | None:
        return normalize_isbn(v) if v is not None else v

    @field_validator("title")
    @classmethod
    def title_must_not_be_empty(cls, v: str | None) -> str | None:
        return _strip_required(v, "Title") if v is not None else v

    @field_validator("author")
    @classmethod
    def author_must_not_be_empty(cls, v: str | None) -> str | None:
        return _strip_required(v, "Author") if v is not None else v

    @model_validator(mode="after")
    def required_fields_not_null(self) -> "BookUpdate":
        for field in self.REQUIRED_FIELDS:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

    def changes(self) -> dict:
        """Return {field: value} for the fields present in the request."""
        return {
            field: getattr(self, field)
            for field in ("title", "author", "isbn", "description", "price")
            if field in self.model_fields_set
        }


class BookResponse(BaseModel):
    """Schema for book responses."""

    id: int = Field(..., description="Unique identifier")
    title: str
    author: str
    isbn: str
    description: str | None = None
    price: Decimal
    created_at: datetime = Field(..., description="When the book was created")
    updated_at: datetime = Field(..., description="When the book was last updated")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "1984",
                "author": "George Orwell",
                "isbn": "9780451524935",
                "description": "A dystopian novel about totalitarianism",
                "price": "12.99",
                "created_at": "2024-01-15T10:30:00Z",
                "updated_at": "2024-01-15T10:30:00Z",
            }
        },
    )
