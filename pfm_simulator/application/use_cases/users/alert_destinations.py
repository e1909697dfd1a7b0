"""Use cases for reading and updating where alert notifications are sent."""

from __future__ import annotations

import re
from typing import Any

from sqlalchemy.orm import Session

from pfm_simulator.infrastructure.repositories import UserRepository

_PREFERENCE_KEY = "alert_destinations"
_PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{1,14}$")


def get_alert_destinations(session: Session, user_id: int) -> dict[str, Any]:
    """Return the email/sms destinations stored in the user's preferences."""

    user = UserRepository(session).get(user_id)
    if user is None:
        raise ValueError("User not found")
    stored = (user.preferences or {}).get(_PREFERENCE_KEY) or {}
    return {
        "email": stored.get("email") or user.email,
        "sms": stored.get("sms"),
        "email_verified": bool(stored.get("email_verified", False)),
        "sms_verified": bool(stored.get("sms_verified", False)),
    }


def update_alert_destinations(
    session: Session,
    user_id: int,
    *,
    email: str | None = None,
    sms: str | None = None,
) -> dict[str, Any]:
    """Store new destinations; a changed destination loses its verified flag."""

    repository = UserRepository(session)
    user = repository.get(user_id)
    if user is None:
        raise ValueError("User not found")

    preferences = dict(user.preferences or {})
    stored = dict(preferences.get(_PREFERENCE_KEY) or {})
    if email is not None:
        if email != stored.get("email"):
            stored["email_verified"] = False
        stored["email"] = email
    if sms is not None:
        if not _PHONE_PATTERN.match(sms):
            raise ValueError("Must be a valid phone number")
        if sms != stored.get("sms"):
            stored["sms_verified"] = False
        stored["sms"] = sms
    preferences[_PREFERENCE_KEY] = stored
    repository.update_preferences(user_id, preferences)
    return get_alert_destinations(session, user_id)


__all__ = ["get_alert_destinations", "update_alert_destinations"]
