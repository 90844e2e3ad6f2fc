#!/usr/bin/env python3
"""
Account Bootstrap Script

Creates an account directly in the database.

Creating accounts over HTTP (POST /users) requires an access token, and
a token can only be obtained by logging in to an existing account. This
script creates that first account.

USAGE:
    # DATABASE_URL and SECRET_KEY must be set (environment or .env)
    python scripts/create_account.py alice --display-name "Alice"

    # The password is prompted for unless --password is given
"""

import argparse
import getpass
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import select

from catalog.config import get_settings
from catalog.database import create_db_engine, create_session_factory, create_tables
from catalog.models import User
from catalog.schemas import UserCreate
from catalog.services.security import PasswordHasher


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a Catalog API account.")
    parser.add_argument("username", help="Login handle (3-50 chars, starts with a letter)")
    parser.add_argument("--display-name", help="Display name (defaults to the username)")
    parser.add_argument("--password", help="Password (prompted for when omitted)")
    return parser.parse_args(argv)


def create_account(argv: list[str] | None = None) -> int:
    """Create the account described by argv; returns a process exit code."""
    args = parse_args(argv)
    password = args.password or getpass.getpass("Password: ")

    try:
        user_data = UserCreate(
            username=args.username,
            display_name=args.display_name or args.username,
            password=password,
        )
    except SchemaValidationError as e:
        print(f"Invalid account data:\n{e}", file=sys.stderr)
        return 1

    settings = get_settings()
    engine = create_db_engine(settings)
    create_tables(engine)
    session_factory = create_session_factory(engine)
    hasher = PasswordHasher(rounds=settings.bcrypt_rounds)

    try:
        with session_factory() as db:
            stmt = select(User).where(User.username == user_data.username)
            if db.execute(stmt).scalar_one_or_none() is not None:
                print(f"Username already taken: {user_data.username}", file=sys.stderr)
                return 1

            user = User(
                username=user_data.username,
                display_name=user_data.display_name,
                hashed_password=hasher.hash(user_data.password),
            )
            db.add(user)
            db.commit()
            db.refresh(user)
            print(f"Created account {user.id}: {user.username}")
    finally:
        engine.dispose()

    return 0


if __name__ == "__main__":
    sys.exit(create_account())
