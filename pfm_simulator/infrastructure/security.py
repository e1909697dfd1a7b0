"""Security helpers for hashing and token generation."""

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from pfm_simulator.config import get_settings

JWT_ALGORITHM = "HS256"

pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=310_000,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    # Imported users carry an empty hash and cannot log in with a password.
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


# ---- JWT ----
settings = get_settings()


def create_access_token(
    *,
    user_id: int,
    partner_id: int,
    email: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Issue a session token understood by both client token readers.

    The payload carries the simulator shape (``userId``/``partnerId``) and the
    vendor shape (``sub``/``iss``/``email``) side by side.
    """

    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    claims: dict[str, Any] = {
        "userId": str(user_id),
        "partnerId": str(partner_id),
        "sub": str(user_id),
        "iss": str(partner_id),
        "exp": expire,
    }
    if email:
        claims["email"] = email
    return jwt.encode(claims, settings.jwt_secret, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Return ``{"user_id", "partner_id", "email"}`` for either token shape."""

    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[JWT_ALGORITHM],
            options={"verify_aud": False},
        )
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc

    raw_user_id = payload.get("userId") or payload.get("sub")
    raw_partner_id = payload.get("partnerId") or payload.get("iss")
    try:
        user_id = int(raw_user_id)
        partner_id = int(raw_partner_id) if raw_partner_id is not None else None
    except (TypeError, ValueError) as exc:
        raise ValueError("Could not validate credentials") from exc
    return {
        "user_id": user_id,
        "partner_id": partner_id,
        "email": payload.get("email"),
    }


def create_vendor_assertion(
    *,
    api_key: str,
    partner_id: str,
    partner_domain: str,
    pcid: str,
    issued_at: datetime,
    lifetime: timedelta,
) -> str:
    """Sign the short-lived assertion the vendor API expects as a bearer token."""

    claims = {
        "iss": str(partner_id),
        "aud": partner_domain,
        "sub": str(pcid),
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + lifetime).timestamp()),
    }
    return jwt.encode(claims, api_key, algorithm=JWT_ALGORITHM)


__all__ = [
    "create_access_token",
    "create_vendor_assertion",
    "decode_access_token",
    "get_password_hash",
    "verify_password",
]
