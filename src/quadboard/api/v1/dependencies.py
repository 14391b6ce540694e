"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from quadboard.core.security import Identity, InvalidTokenError, decode_identity_token
from quadboard.db.session import get_db
from quadboard.models import User
from quadboard.services.errors import (
    InvalidOperationError,
    NotFoundError,
    QuadboardError,
    UnauthorizedError,
)
from quadboard.services.perspective import ModerationOracle, get_moderation_oracle
from quadboard.services.users import ensure_user

# HTTP Bearer scheme for identity-provider tokens
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_identity(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
) -> Identity:
    """Verify the bearer token issued by the identity provider.

    Raises:
        HTTPException: If the token is invalid
    """
    try:
        return decode_identity_token(credentials.credentials)
    except InvalidTokenError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err


IdentityDep = Annotated[Identity, Depends(get_identity)]


def get_current_user(identity: IdentityDep, db: SessionDep) -> User:
    """Return the caller's user document, creating it on first sight."""
    return ensure_user(db, identity.user_id, email=identity.email, name=identity.name)


def get_verified_user(identity: IdentityDep, db: SessionDep) -> User:
    """Like `get_current_user` but requires a verified email address."""
    if not identity.email_verified:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Email address is not verified",
        )
    return get_current_user(identity, db)


def get_active_user(user: Annotated[User, Depends(get_verified_user)]) -> User:
    """Verified user who is not currently suspended."""
    if user.is_suspended():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is suspended",
        )
    return user


def get_oracle_dep() -> ModerationOracle:
    """Return the shared moderation oracle."""
    return get_moderation_oracle()


# Type aliases for user dependencies
CurrentUserDep = Annotated[User, Depends(get_current_user)]
VerifiedUserDep = Annotated[User, Depends(get_verified_user)]
ActiveUserDep = Annotated[User, Depends(get_active_user)]
OracleDep = Annotated[ModerationOracle, Depends(get_oracle_dep)]


def http_error(err: QuadboardError) -> HTTPException:
    """Translate a domain error into the matching HTTP error."""
    if isinstance(err, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(err, UnauthorizedError):
        code = status.HTTP_403_FORBIDDEN
    elif isinstance(err, InvalidOperationError):
        code = status.HTTP_409_CONFLICT
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=code, detail=str(err))
