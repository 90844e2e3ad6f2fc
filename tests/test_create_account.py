"""
Tests for the account bootstrap script (scripts/create_account.py).
"""

import importlib.util
from pathlib import Path

import pytest
from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session

from catalog.config import get_settings
from catalog.models import User
from catalog.services.security import PasswordHasher

SCRIPT = Path(__file__).parent.parent / "scripts" / "create_account.py"


def load_script():
    spec = importlib.util.spec_from_file_location("create_account", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def database_url(tmp_path, monkeypatch):
    """Point the script at a throwaway SQLite file."""
    url = f"sqlite:///{tmp_path / 'bootstrap.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    get_settings.cache_clear()
    yield url
    get_settings.cache_clear()


def fetch_users(url: str) -> list[User]:
    engine = create_engine(url)
    try:
        with Session(engine) as db:
            users = db.execute(select(User)).scalars().all()
            db.expunge_all()
            return users
    finally:
        engine.dispose()


def test_creates_account(database_url, capsys):
    script = load_script()

    exit_code = script.create_account(["Alice", "--display-name", "Alice", "--password", "s3cret!"])

    assert exit_code == 0
    assert "Created account" in capsys.readouterr().out
    users = fetch_users(database_url)
    assert [u.username for u in users] == ["alice"]
    assert PasswordHasher(rounds=4).verify("s3cret!", users[0].hashed_password)


def test_display_name_defaults_to_username(database_url):
    script = load_script()

    script.create_account(["bob", "--password", "hunter22"])

    assert fetch_users(database_url)[0].display_name == "bob"


def test_duplicate_username(database_url, capsys):
    script = load_script()
    script.create_account(["alice", "--password", "one"])

    exit_code = script.create_account(["alice", "--password", "two"])

    assert exit_code == 1
    assert "already taken" in capsys.readouterr().err
    assert len(fetch_users(database_url)) == 1


def test_invalid_username(database_url, capsys):
    script = load_script()

    exit_code = script.create_account(["9lives", "--password", "pw"])

    assert exit_code == 1
    assert "Invalid account data" in capsys.readouterr().err
