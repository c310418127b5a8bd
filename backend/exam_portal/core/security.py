"""
Exam Portal - Security Module
Password hashing and access tokens bound to one application's settings
"""
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from exam_portal.core.config import Settings

ACCESS_TOKEN_TYPE = "access"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


class TokenCodec:
    """
    Issues and checks signed access tokens.

    Each application gets its own codec from its settings, so two apps with
    different secrets never accept each other's tokens.
    """

    def __init__(self, secret_key: str, algorithm: str, expire_minutes: int):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.lifetime = timedelta(minutes=expire_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenCodec":
        return cls(
            secret_key=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
            expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        )

    def issue(
        self,
        user_id: str,
        claims: dict[str, Any] | None = None,
        lifetime: timedelta | None = None,
    ) -> str:
        """
        Sign an access token for a user.

        Args:
            user_id: Stored as the ``sub`` claim
            claims: Extra claims such as email and username
            lifetime: Overrides the configured token lifetime
        """
        issued_at = datetime.now(timezone.utc)
        payload = {
            **(claims or {}),
            "sub": str(user_id),
            "type": ACCESS_TOKEN_TYPE,
            "iat": issued_at,
            "exp": issued_at + (lifetime if lifetime is not None else self.lifetime),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> dict[str, Any] | None:
        """Signature- and expiry-checked claims, or None."""
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None

    def verify(self, token: str) -> dict[str, Any] | None:
        """Claims of a valid access token, or None for anything else."""
        payload = self.decode(token)
        if payload is None or payload.get("type") != ACCESS_TOKEN_TYPE:
            return None
        return payload
