"""Identity-token helpers.

Tokens are issued by the external identity provider. This service only
verifies them and reads the stable user id and the email-verification flag.
`create_identity_token` exists for local tooling and tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from jose import JWTError, jwt

from quadboard.core.settings import settings
from quadboard.db.time import utcnow


class InvalidTokenError(ValueError):
    """Raised when an identity token cannot be verified."""


@dataclass(frozen=True)
class Identity:
    """Claims this service relies on."""

    user_id: str
    email_verified: bool
    email: str | None = None
    name: str | None = None


def decode_identity_token(token: str) -> Identity:
    """Verify a bearer token and return its identity claims.

    Raises:
        InvalidTokenError: If the signature, expiry or subject is invalid.
    """
    try:
        payload = jwt.decode(
            token,
            settings.identity_secret_key,
            algorithms=[settings.identity_jwt_algorithm],
        )
    except JWTError as err:
        raise InvalidTokenError("Could not validate credentials") from err

    subject = payload.get("sub")
    if not subject or not isinstance(subject, str):
        raise InvalidTokenError("Token has no subject")

    return Identity(
        user_id=subject,
        email_verified=bool(payload.get("email_verified", False)),
        email=payload.get("email"),
        name=payload.get("name"),
    )


def create_identity_token(
    user_id: str,
    *,
    email_verified: bool = True,
    email: str | None = None,
    name: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Mint a token with the same shape the identity provider issues."""
    expire = utcnow() + (
        expires_delta or timedelta(minutes=settings.identity_token_expire_minutes)
    )
    claims: dict[str, Any] = {
        "sub": user_id,
        "email_verified": email_verified,
        "exp": expire,
    }
    if email is not None:
        claims["email"] = email
    if name is not None:
        claims["name"] = name
    return jwt.encode(
        claims,
        settings.identity_secret_key,
        algorithm=settings.identity_jwt_algorithm,
    )
