"""
Security Service

Password hashing for account credentials.

Security Features:
==================
1. Password hashing with bcrypt (passlib)
2. Fresh random salt on every hash, so equal passwords never share a hash
3. Constant-time verification, provided by the bcrypt backend
4. Work factor taken from configuration (BCRYPT_ROUNDS)

Usage:
    from catalog.services.security import PasswordHasher

    hasher = PasswordHasher(rounds=12)
    hashed = hasher.hash("s3cret!")
    hasher.verify("s3cret!", hashed)   # True
"""

import logging

from passlib.context import CryptContext

from catalog.schemas.user import MAX_PASSWORD_BYTES

logger = logging.getLogger(__name__)


class PasswordHasher:
    """
    Hashes and verifies account passwords.

    One instance is built by the application factory from Settings and
    shared by every request (see catalog.dependencies.get_password_hasher).
    The hasher only returns hashes; persisting them is the caller's job.
    """

    def __init__(self, rounds: int = 12) -> None:
        # CryptContext handles password hashing with bcrypt
        # - deprecated="auto": hashes made with old settings are flagged for upgrade
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        """
        Hash a plain text password using bcrypt.

        Example:
            >>> hashed = PasswordHasher(rounds=4).hash("s3cret!")
            >>> hashed.startswith("$2b$")
            True
        """
        return self._context.hash(password)

    def verify(self, password: str, hashed_password: str | None) -> bool:
        """
        Verify a plain password against a stored hash.

        Returns False for a wrong password and also for a missing or
        malformed hash; "not verified" is the only negative outcome.

        Passwords bcrypt would truncate or reject never verify: no stored
        hash can have been made from one.
        """
        if not hashed_password:
            return False
        if "\x00" in password or len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            self._context.dummy_verify()
            return False
        try:
            return self._context.verify(password, hashed_password)
        except (ValueError, TypeError):
            logger.warning("Stored password hash could not be parsed")
            return False

    def dummy_verify(self) -> None:
        """
        Spend the time of one verification without a real hash.

        Called when a login names an unknown account, so that response
        timing does not reveal which usernames exist.
        """
        self._context.dummy_verify()
