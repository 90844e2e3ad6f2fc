"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 for the Catalog API.

Engine Ownership
================
The engine and session factory are not module-level globals. The
application factory (catalog.main.create_app) builds them from the
Settings instance and stores them on app.state; the get_db dependency
reads the factory from there. Tests can therefore create an app against
any database and still override get_db.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives -> create a new session
2. Use session for all database operations in that request
3. Commit on success, rollback on failure
4. Close session when request ends
"""

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager

from fastapi import Request
from sqlalchemy import Engine, create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from catalog.config import Settings
from catalog.exceptions import ValidationError

logger = logging.getLogger(__name__)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

        class Book(Base):
            __tablename__ = "books"
            ...
    """
    pass


# =============================================================================
# Engine and Session Factory
# =============================================================================
def create_db_engine(settings: Settings) -> Engine:
    """
    Create the SQLAlchemy engine for the configured database.

    Key parameters:
    - pool_size / max_overflow: connection pool sizing (server databases only)
    - pool_pre_ping: test connection health before using
    - echo: log all SQL statements in debug mode

    SQLite does not take pool sizing arguments, and its connections must
    be usable from the threadpool FastAPI runs sync endpoints in.
    """
    if settings.is_sqlite:
        return create_engine(
            settings.database_url,
            connect_args={"check_same_thread": False},
            echo=settings.debug,
        )

    return create_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        echo=settings.debug,
    )


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """
    Create a session factory bound to the engine.

    - autocommit=False: We control when to commit
    - autoflush=False: Don't auto-flush before queries
    """
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Creates a session from the factory stored on app.state, yields it to
    the route handler and closes it when the request ends.

    Usage in Routes:
        @router.get("/books")
        def list_books(db: Session = Depends(get_db)):
            ...

    Yields:
        SQLAlchemy Session instance
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Storage Error Mapping
# =============================================================================
@contextmanager
def storage_errors(db: Session, message: str) -> Iterator[None]:
    """
    Turn storage failures inside the block into a ValidationError.

    The session is rolled back and the underlying error is logged; the
    caller only ever sees the generic per-operation message.

    Usage:
        with storage_errors(db, "Failed to create book"):
            db.add(book)
            db.commit()
    """
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"{message}: {exc}")
        raise ValidationError(message) from exc


# =============================================================================
# Utility Functions
# =============================================================================
def create_tables(engine: Engine) -> None:
    """
    Create all database tables that do not exist yet.

    Used at startup (when create_tables_on_startup is set), by the
    bootstrap script, and by the test suite.
    """
    # Importing the models registers them on Base.metadata
    import catalog.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def drop_tables(engine: Engine) -> None:
    """
    Drop all database tables.

    DANGER: This deletes all data! Only use in tests.
    """
    Base.metadata.drop_all(bind=engine)
