"""Caller identity resolution from bearer tokens."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import JWTError, jwt

from jotion.config import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Authenticated caller. `subject` is the stable user identifier."""

    subject: str
    issuer: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None


class IdentityProvider:
    """Issues and verifies signed bearer tokens carrying a `sub` claim."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        issuer: str | None = None,
        token_ttl_seconds: int = 3600,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.issuer = issuer
        self.token_ttl_seconds = token_ttl_seconds

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "IdentityProvider":
        """Build a provider from application settings."""
        if settings is None:
            settings = get_settings()
        return cls(
            secret=settings.auth_secret,
            algorithm=settings.auth_algorithm,
            issuer=settings.auth_issuer,
            token_ttl_seconds=settings.auth_token_ttl_seconds,
        )

    def issue_token(
        self,
        subject: str,
        expires_in: timedelta | None = None,
        **claims: Any,
    ) -> str:
        """
        Create a signed token for a subject.

        Args:
            subject: User identifier placed in the `sub` claim
            expires_in: Token lifetime (defaults to the configured TTL)
            **claims: Extra claims such as name or email

        Returns:
            Encoded JWT
        """
        if expires_in is None:
            expires_in = timedelta(seconds=self.token_ttl_seconds)

        to_encode = dict(claims)
        to_encode["sub"] = subject
        to_encode["exp"] = datetime.now(timezone.utc) + expires_in
        if self.issuer:
            to_encode["iss"] = self.issuer
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def get_user_identity(self, token: str | None) -> Optional[Identity]:
        """
        Resolve the caller behind a token.

        Returns None when the token is missing, malformed, expired, signed with
        another key, or has no subject. None means "unauthenticated".
        """
        if not token:
            return None

        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                issuer=self.issuer,
            )
        except JWTError as e:
            logger.info("Rejected bearer token: %s", e)
            return None

        subject = payload.get("sub")
        if not subject:
            return None

        return Identity(
            subject=str(subject),
            issuer=payload.get("iss"),
            name=payload.get("name"),
            email=payload.get("email"),
        )

    def from_authorization_header(self, authorization: str | None) -> Optional[Identity]:
        """Resolve the caller from an `Authorization: Bearer <token>` header value."""
        return self.get_user_identity(extract_token_from_header(authorization))


def extract_token_from_header(authorization: str | None) -> Optional[str]:
    """Extract the token from an Authorization header value."""
    if not authorization:
        return None

    parts = authorization.split()

    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None

    return parts[1]
