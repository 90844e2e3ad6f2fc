"""
pytest Fixtures for Catalog API Tests

This file contains shared fixtures used across all test files.

For database tests, we use:
- session scope for the engine (expensive to create)
- function scope for sessions: every test runs inside a transaction
  that is rolled back afterwards, so tests don't affect each other
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app.
# The app is created at import time from these settings.
import os

os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"  # minimum work factor keeps the suite fast

from collections.abc import Generator
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from catalog.database import create_tables, drop_tables, get_db
from catalog.main import app
from catalog.models import Book, User
from catalog.services.security import PasswordHasher
from catalog.services.tokens import TokenService

# =============================================================================
# DATABASE FIXTURES
# =============================================================================
# SQLite in-memory: fast, isolated, no external database needed.


@pytest.fixture(scope="session")
def engine():
    """
    Create a SQLite in-memory database engine.

    StaticPool keeps one connection alive for the entire session;
    without it the in-memory database would disappear between connections.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # pysqlite's own transaction handling breaks SAVEPOINT; let SQLAlchemy
    # emit BEGIN itself so the per-test savepoints below work.
    @event.listens_for(engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")

    create_tables(engine)

    yield engine

    drop_tables(engine)


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Create a fresh database session for each test.

    The session joins an outer transaction through a savepoint, so
    commits and rollbacks made by the code under test stay inside it,
    and everything is discarded when the test ends.
    """
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        join_transaction_mode="create_savepoint",
    )

    connection = engine.connect()
    transaction = connection.begin()
    session = TestSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.

    We override the get_db dependency to use our test session.
    """

    def override_get_db():
        """Provide test database session instead of real one."""
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================
@pytest.fixture
def password_hasher() -> PasswordHasher:
    """The hasher the app under test uses."""
    return app.state.password_hasher


@pytest.fixture
def token_service() -> TokenService:
    """The token service the app under test uses."""
    return app.state.token_service


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
@pytest.fixture
def sample_user(db_session: Session, password_hasher: PasswordHasher) -> User:
    """Create a sample account: alice / s3cret!"""
    user = User(
        username="alice",
        display_name="Alice",
        hashed_password=password_hasher.hash("s3cret!"),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def second_user(db_session: Session, password_hasher: PasswordHasher) -> User:
    """Create a second account for cross-account scenarios."""
    user = User(
        username="bob",
        display_name="Bob",
        hashed_password=password_hasher.hash("hunter22"),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def auth_headers(sample_user: User, token_service: TokenService) -> dict[str, str]:
    """Authorization header carrying a valid token for sample_user."""
    token = token_service.issue(sample_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def sample_book(db_session: Session) -> Book:
    """Create a sample book."""
    book = Book(
        title="1984",
        author="George Orwell",
        isbn="9780451524935",
        description="A dystopian novel set in a totalitarian society.",
        price=Decimal("12.99"),
    )
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def multiple_books(db_session: Session) -> list[Book]:
    """Create a handful of books by two authors."""
    books = [
        Book(
            title="Animal Farm",
            author="George Orwell",
            isbn="9780451526342",
            price=Decimal("8.99"),
        ),
        Book(
            title="Pride and Prejudice",
            author="Jane Austen",
            isbn="9780141439518",
            price=Decimal("9.50"),
        ),
        Book(
            title="Emma",
            author="Jane Austen",
            isbn="9780141439587",
            price=Decimal("0.00"),
        ),
    ]
    db_session.add_all(books)
    db_session.commit()
    for book in books:
        db_session.refresh(book)
    return books
