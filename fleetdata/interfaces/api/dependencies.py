"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from fleetdata.infrastructure.import_sessions import (
    InMemoryImportSessionStore,
    get_import_session_store,
)
from fleetdata.infrastructure.security import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")

_CREDENTIALS_EXCEPTION_DETAIL = "Could not validate credentials"


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=_CREDENTIALS_EXCEPTION_DETAIL,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_actor_id(token: str) -> str:
    """Return the ``sub`` claim of ``token``."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _unauthorized() from exc

    subject = payload.get("sub")
    if subject is None or not str(subject).strip():
        raise _unauthorized()
    return str(subject)


def get_current_actor(token: str = Depends(oauth2_scheme)) -> str:
    """Return the identifier of the authenticated caller."""

    return resolve_actor_id(token)


def get_session_store() -> InMemoryImportSessionStore:
    return get_import_session_store()


__all__ = [
    "get_current_actor",
    "get_session_store",
    "oauth2_scheme",
    "resolve_actor_id",
]
