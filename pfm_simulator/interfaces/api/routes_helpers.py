"""Helper utilities shared across API route handlers."""

from __future__ import annotations

from typing import Any

from pfm_simulator.application.use_cases.alert_evaluation import EvaluationResult
from pfm_simulator.domain.entities import Alert, Notification, Transaction, User
from pfm_simulator.utils.serializers import (
    serialize,
    serialize_decimal,
    serialize_datetime,
)


def serialize_alert(alert: Alert) -> dict[str, Any]:
    return serialize(
        {
            "id": alert.id,
            "user_id": alert.user_id,
            "alert_type": alert.alert_type,
            "name": alert.name,
            "source_type": alert.source_type,
            "source_id": alert.source_id,
            "conditions": alert.conditions or {},
            "email_delivery": alert.email_delivery,
            "sms_delivery": alert.sms_delivery,
            "active": alert.active,
            "last_triggered_at": serialize_datetime(alert.last_triggered_at),
            "created_at": serialize_datetime(alert.created_at),
            "updated_at": serialize_datetime(alert.updated_at),
        }
    )


def serialize_notification(notification: Notification) -> dict[str, Any]:
    return serialize(
        {
            "id": notification.id,
            "user_id": notification.user_id,
            "alert_id": notification.alert_id,
            "alert_type": notification.alert_type,
            "title": notification.title,
            "message": notification.message,
            "metadata": notification.metadata or {},
            "email_status": notification.email_status,
            "sms_status": notification.sms_status,
            "read": notification.read,
            "read_at": serialize_datetime(notification.read_at),
            "created_at": serialize_datetime(notification.created_at),
        }
    )


def serialize_transaction(transaction: Transaction) -> dict[str, Any]:
    return serialize(
        {
            "id": transaction.id,
            "account_id": transaction.account_id,
            "amount": serialize_decimal(transaction.amount),
            "balance": serialize_decimal(transaction.balance),
            "merchant_name": transaction.merchant_name,
            "nickname": transaction.nickname,
            "original_name": transaction.original_description,
            "description": transaction.description,
            "posted_at": serialize_datetime(transaction.posted_at),
            "created_at": serialize_datetime(transaction.created_at),
        }
    )


def serialize_login_user(user: User) -> dict[str, Any]:
    return {
        "id": str(user.id),
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "partner_id": str(user.partner_id),
    }


def serialize_evaluation(result: EvaluationResult) -> dict[str, Any]:
    """Summarize an evaluation pass without the notification bodies."""

    return {
        "evaluated_count": result.evaluated_count,
        "fired_count": result.fired_count,
        "suppressed_count": result.suppressed_count,
        "errors": [
            {"alert_id": failure.alert_id, "message": failure.message}
            for failure in result.errors
        ],
    }


__all__ = [
    "serialize_alert",
    "serialize_evaluation",
    "serialize_login_user",
    "serialize_notification",
    "serialize_transaction",
]
