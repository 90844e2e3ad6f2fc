"""
Book Model

The catalog item. Books are identified externally by their ISBN, which
must be unique across the catalog.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from catalog.database import Base


class Book(Base):
    """
    Book model representing items in the catalog.

    Table: books

    Fields:
    - title: Book title (required)
    - author: Name of the author (required, free text)
    - isbn: International Standard Book Number (required, unique)
    - description: Book summary/description
    - price: Book price with 2 decimal precision (required, non-negative)

    Indexes:
    - Primary key on id (automatic)
    - isbn: Unique index for lookups
    - title, author: Indexes for exact-match search

    Example:
        book = Book(
            title="1984",
            author="George Orwell",
            isbn="9780451524935",
            price=Decimal("12.99"),
        )
    """

    __tablename__ = "books"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_books_price_non_negative"),
    )

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    id: Mapped[int] = mapped_column(primary_key=True)

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    title: Mapped[str] = mapped_column(
        String(500),
        index=True,
        nullable=False,
        comment="Book title"
    )

    author: Mapped[str] = mapped_column(
        String(255),
        index=True,
        nullable=False,
        comment="Author name"
    )

    # Stored without hyphens so lookups are exact
    isbn: Mapped[str] = mapped_column(
        String(20),
        unique=True,
        index=True,
        nullable=False,
        comment="International Standard Book Number"
    )

    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Book description or summary"
    )

    # Numeric(10, 2): Decimal (not float) for precise money values
    price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        comment="Book price in USD"
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', isbn='{self.isbn}')"
