"""
Password hashing and session tokens.

Tokens are HS256-signed JWTs carrying ``userId``, ``username``, ``iat`` and
``exp``. Verification is stateless: no store lookup and no revocation list, so
a token stays valid until it expires even if the account changes.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt

from storefront.exceptions import InvalidTokenError

logger = logging.getLogger(__name__)

# bcrypt only reads the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 10) -> str:
    """Return a salted bcrypt hash of ``password``."""
    hashed = bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check ``password`` against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError as e:
        # Stored value is not a bcrypt hash
        logger.warning(f"Unreadable password hash: {e}")
        return False


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    username: str
    issued_at: datetime
    expires_at: datetime


class TokenService:
    """
    Issues and verifies signed, time-limited session tokens.

    Args:
        secret_key: HMAC signing secret
        algorithm: JWT algorithm; verification accepts only this one
        lifetime: How long an issued token stays valid
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        lifetime: timedelta = timedelta(hours=1),
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.lifetime = lifetime

    def issue(self, user_id: int, username: str, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "userId": user_id,
            "username": username,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Verify a token and return its claims.

        Raises:
            InvalidTokenError: bad signature, malformed token, missing claims or expired
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise InvalidTokenError("expired")
        except jwt.PyJWTError as e:
            raise InvalidTokenError(str(e))

        user_id = payload.get("userId")
        username = payload.get("username")
        # bool is an int subclass; reject it explicitly
        if not isinstance(user_id, int) or isinstance(user_id, bool) or not isinstance(username, str):
            raise InvalidTokenError("missing or malformed identity claims")

        return TokenClaims(
            user_id=user_id,
            username=username,
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
