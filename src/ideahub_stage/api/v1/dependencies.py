"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, Path
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from ideahub_stage.core.security import decode_access_token
from ideahub_stage.db.session import get_db
from ideahub_stage.models import User
from ideahub_stage.schemas.common import MAX_ENTITY_ID
from ideahub_stage.services.errors import UnauthenticatedError

# Missing credentials are reported as Unauthenticated by the dependencies below.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]

# Ids outside the key range cannot exist; reject them before they reach the store.
EntityIdPath = Annotated[int, Path(ge=1, le=MAX_ENTITY_ID)]


def _resolve_user(credentials: HTTPAuthorizationCredentials, db: Session) -> User:
    """Map a bearer token to the account it was issued for.

    Raises:
        UnauthenticatedError: If the token is invalid or the account is unknown.
    """
    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError as err:
        raise UnauthenticatedError("Could not validate credentials") from err

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise UnauthenticatedError("Could not validate credentials")

    user = db.get(User, subject)
    if user is None:
        raise UnauthenticatedError("User not found")
    return user


def get_current_user(credentials: CredentialsDep, db: SessionDep) -> User:
    """Return the authenticated caller or fail with Unauthenticated."""
    if credentials is None:
        raise UnauthenticatedError("You must be logged in")
    return _resolve_user(credentials, db)


def get_optional_user(credentials: CredentialsDep, db: SessionDep) -> User | None:
    """Return the caller when a token is presented, ``None`` for anonymous requests."""
    if credentials is None:
        return None
    return _resolve_user(credentials, db)


# Type aliases for identity dependencies
CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]
