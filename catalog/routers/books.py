"""
Books Router

CRUD endpoints for catalog items.

Public:
- GET /books - List every book
- GET /books/search - Exact-match search on title, author and ISBN
- GET /books/{book_id} - One book

Require an access token:
- POST /books - Create a book
- PUT /books/{book_id} - Update the fields present in the body
- DELETE /books/{book_id} - Delete a book
"""

import logging

from fastapi import APIRouter, Query, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from catalog.database import storage_errors
from catalog.dependencies import Authenticated, DbSession
from catalog.exceptions import NotFoundError, ValidationError, failure_message
from catalog.models import Book
from catalog.schemas import BookCreate, BookResponse, BookUpdate, MessageResponse
from catalog.schemas.book import normalize_isbn

logger = logging.getLogger(__name__)

# =============================================================================
# Router Configuration
# =============================================================================

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        400: {"description": "Invalid request"},
        404: {"description": "Book not found"},
    },
)


# =============================================================================
# Helper Functions
# =============================================================================
def get_book_or_404(db: Session, book_id: int) -> Book:
    """
    Get a book by ID or raise NotFoundError.

    Raises:
        NotFoundError: 404 if book not found
    """
    stmt = select(Book).where(Book.id == book_id)
    book = db.execute(stmt).scalar_one_or_none()

    if book is None:
        raise NotFoundError("Book not found")

    return book


def isbn_taken(db: Session, isbn: str, exclude_id: int | None = None) -> bool:
    """Check whether another book already uses this ISBN."""
    stmt = select(Book.id).where(Book.isbn == isbn)
    if exclude_id is not None:
        stmt = stmt.where(Book.id != exclude_id)
    return db.execute(stmt).first() is not None


# =============================================================================
# Public Endpoints
# =============================================================================
@router.get(
    "",
    response_model=list[BookResponse],
    summary="List all books",
    description="Get every book in the catalog, oldest first.",
)
def list_books(db: DbSession) -> list[BookResponse]:
    with storage_errors(db, failure_message("list_books")):
        books = db.execute(select(Book).order_by(Book.id)).scalars().all()

    return [BookResponse.model_validate(book) for book in books]


@router.get(
    "/search",
    response_model=list[BookResponse],
    summary="Search books",
    description="Find books whose fields exactly match every given parameter.",
)
def search_books(
    db: DbSession,
    title: str | None = Query(
        default=None,
        min_length=1,
        max_length=500,
        description="Exact title",
        examples=["1984"],
    ),
    author: str | None = Query(
        default=None,
        min_length=1,
        max_length=255,
        description="Exact author name",
        examples=["George Orwell"],
    ),
    isbn: str | None = Query(
        default=None,
        min_length=1,
        max_length=20,
        description="ISBN (hyphens allowed)",
        examples=["978-0451524935"],
    ),
) -> list[BookResponse]:
    """
    Exact-match search.

    Parameters are combined with AND; with no parameters every book
    is returned.

    Examples:
        GET /books/search?title=1984
        GET /books/search?author=George%20Orwell&title=1984
    """
    message = failure_message("search_books")

    stmt = select(Book)
    if title is not None:
        stmt = stmt.where(Book.title == title)
    if author is not None:
        stmt = stmt.where(Book.author == author)
    if isbn is not None:
        try:
            stmt = stmt.where(Book.isbn == normalize_isbn(isbn))
        except ValueError:
            raise ValidationError(message) from None

    with storage_errors(db, message):
        books = db.execute(stmt.order_by(Book.id)).scalars().all()

    return [BookResponse.model_validate(book) for book in books]


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    summary="Get a book by ID",
    description="Retrieve one book.",
)
def get_book(book_id: int, db: DbSession) -> BookResponse:
    with storage_errors(db, failure_message("get_book")):
        book = get_book_or_404(db, book_id)

    return BookResponse.model_validate(book)


# =============================================================================
# Protected Endpoints
# =============================================================================
@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new book",
    description="Add a book to the catalog. Requires an access token.",
)
def create_book(
    book_data: BookCreate,
    db: DbSession,
    identity: Authenticated,
) -> BookResponse:
    """
    Create a new book.

    Raises:
        ValidationError: 400 if the ISBN is already in the catalog
    """
    message = failure_message("create_book")

    with storage_errors(db, message):
        if isbn_taken(db, book_data.isbn):
            logger.info(f"Rejected duplicate ISBN: {book_data.isbn}")
            raise ValidationError(message)

        book = Book(
            title=book_data.title,
            author=book_data.author,
            isbn=book_data.isbn,
            description=book_data.description,
            price=book_data.price,
        )

        db.add(book)
        db.commit()
        db.refresh(book)

    logger.info(f"Book {book.id} created by account {identity.account_id}")

    return BookResponse.model_validate(book)


@router.put(
    "/{book_id}",
    response_model=BookResponse,
    summary="Update a book",
    description="Update the fields given in the body. Requires an access token.",
)
def update_book(
    book_id: int,
    book_data: BookUpdate,
    db: DbSession,
    identity: Authenticated,
) -> BookResponse:
    """
    Update an existing book.

    Only fields present in the request body are changed.

    Raises:
        NotFoundError: 404 if book not found
        ValidationError: 400 if the new ISBN belongs to another book
    """
    message = failure_message("update_book")
    changes = book_data.changes()

    with storage_errors(db, message):
        book = get_book_or_404(db, book_id)

        if "isbn" in changes and isbn_taken(db, changes["isbn"], exclude_id=book_id):
            logger.info(f"Rejected duplicate ISBN on update: {changes['isbn']}")
            raise ValidationError(message)

        if "title" in changes:
            book.title = changes["title"]
        if "author" in changes:
            book.author = changes["author"]
        if "isbn" in changes:
            book.isbn = changes["isbn"]
        if "description" in changes:
            book.description = changes["description"]
        if "price" in changes:
            book.price = changes["price"]

        db.commit()
        db.refresh(book)

    logger.info(f"Book {book_id} updated by account {identity.account_id}: {sorted(changes)}")

    return BookResponse.model_validate(book)


@router.delete(
    "/{book_id}",
    response_model=MessageResponse,
    summary="Delete a book",
    description="Permanently delete a book. Requires an access token.",
)
def delete_book(
    book_id: int,
    db: DbSession,
    identity: Authenticated,
) -> MessageResponse:
    with storage_errors(db, failure_message("delete_book")):
        book = get_book_or_404(db, book_id)
        db.delete(book)
        db.commit()

    logger.info(f"Book {book_id} deleted by account {identity.account_id}")

    return MessageResponse(message="Book deleted successfully")
