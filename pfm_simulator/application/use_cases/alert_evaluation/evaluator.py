"""Evaluate active alerts and emit at most one notification per cooldown window."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pfm_simulator.application.use_cases.notifications.delivery import (
    deliver_notification,
)
from pfm_simulator.config import get_settings
from pfm_simulator.domain.entities import (
    DELIVERY_PENDING,
    Alert,
    Notification,
)
from pfm_simulator.infrastructure.repositories import AlertRepository, UserRepository
from pfm_simulator.utils import Clock, ensure_app_timezone, now_in_app_timezone

from .conditions import ConditionEvaluationError, decode_conditions
from .fingerprints import FingerprintCache, notification_fingerprint
from .predicates import CHECKS, AlertMatch

logger = logging.getLogger(__name__)

Deliver = Callable[[Session, Notification, Alert], Notification]


@dataclass(frozen=True)
class AlertEvaluationFailure:
    alert_id: int | None
    message: str


@dataclass
class EvaluationResult:
    """Summary of one evaluation pass."""

    evaluated_count: int = 0
    fired_count: int = 0
    suppressed_count: int = 0
    notifications: list[Notification] = field(default_factory=list)
    errors: list[AlertEvaluationFailure] = field(default_factory=list)

    def merge(self, other: "EvaluationResult") -> None:
        self.evaluated_count += other.evaluated_count
        self.fired_count += other.fired_count
        self.suppressed_count += other.suppressed_count
        self.notifications.extend(other.notifications)
        self.errors.extend(other.errors)


def _default_fingerprint_cache() -> FingerprintCache:
    return FingerprintCache(
        timedelta(minutes=get_settings().alert_dedup_window_minutes)
    )


notification_fingerprints = _default_fingerprint_cache()


class AlertEvaluator:
    """Run alert checks for one or many users against an injected clock."""

    def __init__(
        self,
        session: Session,
        *,
        clock: Clock = now_in_app_timezone,
        cooldown: timedelta | None = None,
        fingerprints: FingerprintCache | None = None,
        deliver: Deliver | None = deliver_notification,
    ) -> None:
        self.session = session
        self.clock = clock
        if cooldown is None:
            cooldown = timedelta(minutes=get_settings().alert_cooldown_minutes)
        self.cooldown = cooldown
        self.fingerprints = fingerprints if fingerprints is not None else notification_fingerprints
        self.deliver = deliver
        self.alerts = AlertRepository(session)

    def evaluate(
        self,
        user_id: int | None = None,
        *,
        alert_types: Sequence[str] | None = None,
    ) -> EvaluationResult:
        """Evaluate one user's alerts, or every user with active alerts.

        Failures are collected per alert in ``errors``; this method does not
        raise for condition, data or database problems.
        """

        result = EvaluationResult()
        if user_id is not None:
            user_ids: Sequence[int] = [user_id]
        else:
            try:
                user_ids = UserRepository(self.session).list_ids_with_active_alerts()
            except SQLAlchemyError as exc:
                self.session.rollback()
                logger.exception("Unable to list users with active alerts")
                result.errors.append(AlertEvaluationFailure(None, str(exc)))
                return result

        for current_user_id in user_ids:
            result.merge(self._evaluate_user(current_user_id, alert_types))

        logger.info(
            "Alert evaluation finished: evaluated=%s fired=%s suppressed=%s errors=%s",
            result.evaluated_count,
            result.fired_count,
            result.suppressed_count,
            len(result.errors),
        )
        return result

    def _evaluate_user(
        self, user_id: int, alert_types: Sequence[str] | None
    ) -> EvaluationResult:
        result = EvaluationResult()
        try:
            alerts = self.alerts.list_active_for_user(user_id, alert_types=alert_types)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Unable to load alerts for user %s", user_id)
            result.errors.append(AlertEvaluationFailure(None, str(exc)))
            return result

        for alert in alerts:
            result.evaluated_count += 1
            self._evaluate_alert(alert, result)
        return result

    def _evaluate_alert(self, alert: Alert, result: EvaluationResult) -> None:
        now = ensure_app_timezone(self.clock())
        try:
            match = self._check(alert, now)
        except (ConditionEvaluationError, ArithmeticError) as exc:
            logger.warning("Alert %s could not be evaluated: %s", alert.id, exc)
            result.errors.append(AlertEvaluationFailure(alert.id, str(exc)))
            return
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Database error while evaluating alert %s", alert.id)
            result.errors.append(AlertEvaluationFailure(alert.id, str(exc)))
            return

        if match is None:
            return

        if alert.in_cooldown(now, self.cooldown):
            logger.debug("Alert %s matched but is cooling down", alert.id)
            result.suppressed_count += 1
            return

        metadata = {**match.metadata, "alert_type": alert.alert_type}
        fingerprint = notification_fingerprint(alert.id, metadata)
        if self.fingerprints.seen(fingerprint, now):
            logger.debug("Alert %s produced a duplicate notification; skipped", alert.id)
            result.suppressed_count += 1
            return

        notification = Notification(
            id=None,
            user_id=alert.user_id,
            alert_id=alert.id,
            title=alert.name,
            message=match.message,
            metadata=metadata,
            email_status=DELIVERY_PENDING if alert.email_delivery else None,
            sms_status=DELIVERY_PENDING if alert.sms_delivery else None,
            created_at=now,
        )
        try:
            saved = self.alerts.record_trigger(alert.id, notification, triggered_at=now)
        except (SQLAlchemyError, ValueError) as exc:
            logger.exception("Unable to record trigger for alert %s", alert.id)
            result.errors.append(AlertEvaluationFailure(alert.id, str(exc)))
            return

        self.fingerprints.remember(fingerprint, now)
        alert.last_triggered_at = now
        result.fired_count += 1
        logger.info("Alert %s fired notification %s", alert.id, saved.id)

        if self.deliver is not None:
            try:
                saved = self.deliver(self.session, saved, alert)
            except SQLAlchemyError:
                self.session.rollback()
                logger.exception("Delivery bookkeeping failed for notification %s", saved.id)
        result.notifications.append(saved)

    def _check(self, alert: Alert, now: datetime) -> AlertMatch | None:
        condition = decode_conditions(alert.alert_type, alert.conditions)
        return CHECKS[alert.alert_type](self.session, alert, condition, now)


def evaluate(
    session: Session,
    user_id: int | None = None,
    *,
    alert_types: Sequence[str] | None = None,
    clock: Clock = now_in_app_timezone,
    cooldown: timedelta | None = None,
) -> EvaluationResult:
    """Convenience wrapper around :class:`AlertEvaluator`."""

    evaluator = AlertEvaluator(session, clock=clock, cooldown=cooldown)
    return evaluator.evaluate(user_id, alert_types=alert_types)


__all__ = [
    "AlertEvaluationFailure",
    "AlertEvaluator",
    "EvaluationResult",
    "evaluate",
    "notification_fingerprints",
]
