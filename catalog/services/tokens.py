"""
Token Service

Issues and verifies the JWT access tokens that authenticate API calls.

A token carries three claims:
- sub: the account id (as a string, per the JWT convention)
- iat: issue time
- exp: expiry time (iat + ACCESS_TOKEN_EXPIRE_MINUTES)

Issuing and verifying always use the same secret: the one in the
Settings instance the TokenService was built from. Tokens are not stored
anywhere, so a token stays valid until it expires even if its account is
deleted; rotating SECRET_KEY invalidates every outstanding token.
"""

import logging
from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt

from catalog.config import Settings
from catalog.exceptions import InvalidTokenError, TokenExpiredError
from catalog.schemas.user import TokenClaims

logger = logging.getLogger(__name__)


class TokenService:
    """
    Signs and checks access tokens with one process-wide secret.

    Build it once per application (create_app does this) and inject it
    through catalog.dependencies.get_token_service.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._lifetime = timedelta(minutes=expire_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret_key=settings.secret_key,
            algorithm=settings.jwt_algorithm,
            expire_minutes=settings.access_token_expire_minutes,
        )

    @property
    def lifetime_seconds(self) -> int:
        return int(self._lifetime.total_seconds())

    def issue(self, account_id: int, now: datetime | None = None) -> str:
        """
        Create a signed access token for an account.

        Args:
            account_id: Identity to embed in the token
            now: Issue time; defaults to the current UTC time

        Returns:
            Encoded JWT string (header.payload.signature)
        """
        issued_at = now or datetime.now(UTC)
        claims = {
            "sub": str(account_id),
            "iat": issued_at,
            "exp": issued_at + self._lifetime,
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Check a token's signature and expiry and return its claims.

        Raises:
            TokenExpiredError: signature is valid but the token has expired
            InvalidTokenError: bad signature, unparseable token, or bad claims
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
            )
        except ExpiredSignatureError:
            logger.debug("Rejected expired token")
            raise TokenExpiredError() from None
        except JWTError as e:
            logger.debug(f"Rejected invalid token: {e}")
            raise InvalidTokenError() from None

        try:
            return TokenClaims(
                account_id=int(payload["sub"]),
                issued_at=datetime.fromtimestamp(payload["iat"], UTC),
                expires_at=datetime.fromtimestamp(payload["exp"], UTC),
            )
        except (KeyError, TypeError, ValueError, OverflowError):
            logger.debug("Rejected token with missing or malformed claims")
            raise InvalidTokenError() from None
