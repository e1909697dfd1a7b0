"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from pfm_simulator.domain.entities import User
from pfm_simulator.infrastructure.database import get_db
from pfm_simulator.infrastructure.repositories import UserRepository
from pfm_simulator.infrastructure.security import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/v2/auth/login")


def _credentials_exception(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the user named by ``token``.

    The token's user is authoritative: the ``user_id`` segment of request
    paths is never used to pick whose data is read or written.
    """

    try:
        claims = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_exception() from exc

    user = UserRepository(db).get(claims["user_id"])
    if user is None or user.is_deleted:
        raise _credentials_exception("User not found")
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)
