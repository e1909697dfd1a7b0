"""Use cases for reading, updating and removing alerts."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy.orm import Session

from pfm_simulator.application.use_cases.alert_evaluation import (
    ConditionEvaluationError,
    decode_conditions,
)
from pfm_simulator.domain.entities import Alert
from pfm_simulator.infrastructure.repositories import AlertRepository


def list_alerts(
    session: Session, user_id: int, *, include_inactive: bool = True
) -> Sequence[Alert]:
    """Return the user's alerts, active ones first then newest first."""

    return AlertRepository(session).list_for_user(
        user_id, include_inactive=include_inactive
    )


def get_alert(session: Session, user_id: int, alert_id: int) -> Alert:
    alert = AlertRepository(session).get(alert_id, user_id=user_id)
    if alert is None:
        raise ValueError("Alert not found")
    return alert


def update_alert(
    session: Session,
    user_id: int,
    alert_id: int,
    *,
    name: str | None = None,
    conditions: dict[str, Any] | None = None,
    email_delivery: bool | None = None,
    sms_delivery: bool | None = None,
    active: bool | None = None,
) -> Alert:
    """Apply a partial update. New conditions must decode for the alert's type."""

    alert = get_alert(session, user_id, alert_id)
    if conditions is not None:
        try:
            decode_conditions(alert.alert_type, conditions)
        except ConditionEvaluationError as exc:
            raise ValueError(str(exc)) from exc
        alert.conditions = conditions
    if name is not None:
        alert.name = name
    if email_delivery is not None:
        alert.email_delivery = email_delivery
    if sms_delivery is not None:
        alert.sms_delivery = sms_delivery
    if active is not None:
        alert.active = active
    return AlertRepository(session).update(alert)


def set_alert_active(session: Session, user_id: int, alert_id: int, active: bool) -> Alert:
    return update_alert(session, user_id, alert_id, active=active)


def delete_alert(session: Session, user_id: int, alert_id: int) -> None:
    try:
        AlertRepository(session).soft_delete(alert_id, user_id=user_id)
    except ValueError as exc:
        raise ValueError("Alert not found") from exc


__all__ = [
    "delete_alert",
    "get_alert",
    "list_alerts",
    "set_alert_active",
    "update_alert",
]
