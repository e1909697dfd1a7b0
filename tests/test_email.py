"""Unit tests for the SendGrid email helpers and alert email delivery."""

from __future__ import annotations

import json
import types
from decimal import Decimal

import pytest

from pfm_simulator.application.use_cases.alert_evaluation import AlertEvaluator, FingerprintCache
from pfm_simulator.application.use_cases.notifications import delivery
from pfm_simulator.domain.entities import DELIVERY_FAILED, DELIVERY_PENDING, DELIVERY_SENT
from pfm_simulator.infrastructure import email as email_module
from pfm_simulator.infrastructure.repositories import UserRepository


class DummySettings:
    sendgrid_api_key = "SG.fake"
    sendgrid_sender = "alerts@example.com"


class RecordingClient:
    """Stand-in for ``SendGridAPIClient`` that remembers what it sent."""

    sent: list = []

    def __init__(self, api_key: str):
        self.api_key = api_key

    def send(self, message):
        RecordingClient.sent.append(message)
        return types.SimpleNamespace(status_code=202, body=None)


@pytest.fixture()
def configured(monkeypatch: pytest.MonkeyPatch):
    RecordingClient.sent = []
    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", RecordingClient)
    return RecordingClient


def test_send_email_without_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    """When SendGrid settings are missing the helper should exit early."""

    class Unconfigured:
        sendgrid_api_key = None
        sendgrid_sender = None

    monkeypatch.setattr(email_module, "get_settings", lambda: Unconfigured())

    assert email_module.is_email_configured() is False
    assert email_module.send_email("Subject", "<p>Body</p>", "user@example.com") is False


def test_send_email_success(configured) -> None:
    assert email_module.send_email("Subject", "<p>Body</p>", "user@example.com") is True
    assert len(configured.sent) == 1


def test_send_email_rejects_non_2xx_response(monkeypatch: pytest.MonkeyPatch, configured, caplog) -> None:
    class RejectingClient(RecordingClient):
        def send(self, message):
            return types.SimpleNamespace(status_code=400, body=b'{"errors": [{"message": "bad", "field": "to"}]}')

    monkeypatch.setattr(email_module, "SendGridAPIClient", RejectingClient)

    with caplog.at_level("ERROR"):
        assert email_module.send_email("Subject", "<p>Body</p>", "user@example.com") is False

    assert "status 400" in caplog.text
    assert "bad (field: to)" in caplog.text


def test_send_email_logs_forbidden_error(monkeypatch: pytest.MonkeyPatch, configured, caplog) -> None:
    """Forbidden responses from SendGrid should surface meaningful log details."""

    class FakeForbiddenError(Exception):
        status_code = 403
        body = json.dumps(
            {"errors": [{"message": "The provided authorization grant is invalid."}]}
        ).encode()

    class FailingClient(RecordingClient):
        def send(self, message):
            raise FakeForbiddenError()

    monkeypatch.setattr(email_module, "SendGridAPIClient", FailingClient)

    with caplog.at_level("ERROR"):
        result = email_module.send_email("Subject", "<p>Body</p>", "user@example.com")

    assert result is False
    assert "status 403" in caplog.text
    assert "authorization grant is invalid" in caplog.text


def test_alert_email_escapes_user_content(monkeypatch: pytest.MonkeyPatch) -> None:
    captured = {}

    def fake_send(subject, html_content, recipient):
        captured.update(subject=subject, html=html_content, recipient=recipient)
        return True

    monkeypatch.setattr(email_module, "send_email", fake_send)

    assert email_module.send_alert_notification_email("jane@example.com", "<Coffee>", "A & B") is True
    assert captured["subject"] == "Alert: <Coffee>"
    assert "<h2>&lt;Coffee&gt;</h2>" in captured["html"]
    assert "<p>A &amp; B</p>" in captured["html"]
    assert captured["recipient"] == "jane@example.com"


def _fire_low_balance_alert(session, factory, clock, **alert_overrides):
    factory.user(email="jane@example.com")
    account = factory.account(balance=Decimal("50.00"))
    factory.alert(
        "account_threshold",
        {"account_id": account.id, "threshold": "100.00", "direction": "below"},
        **alert_overrides,
    )
    evaluator = AlertEvaluator(session, clock=clock, fingerprints=FingerprintCache(0))
    result = evaluator.evaluate(1)
    assert result.fired_count == 1
    return result.notifications[0]


def test_delivery_marks_email_sent(monkeypatch: pytest.MonkeyPatch, session, factory, clock) -> None:
    recipients = []
    monkeypatch.setattr(delivery, "is_email_configured", lambda: True)
    monkeypatch.setattr(
        delivery,
        "send_alert_notification_email",
        lambda recipient, title, message: recipients.append(recipient) or True,
    )

    notification = _fire_low_balance_alert(session, factory, clock)

    assert notification.email_status == DELIVERY_SENT
    assert notification.sms_status is None
    assert recipients == ["jane@example.com"]


def test_delivery_marks_email_failed(monkeypatch: pytest.MonkeyPatch, session, factory, clock) -> None:
    monkeypatch.setattr(delivery, "is_email_configured", lambda: True)
    monkeypatch.setattr(delivery, "send_alert_notification_email", lambda *args: False)

    notification = _fire_low_balance_alert(session, factory, clock)

    assert notification.email_status == DELIVERY_FAILED


def test_delivery_prefers_configured_destination(monkeypatch: pytest.MonkeyPatch, session, factory, clock) -> None:
    recipients = []
    monkeypatch.setattr(delivery, "is_email_configured", lambda: True)
    monkeypatch.setattr(
        delivery,
        "send_alert_notification_email",
        lambda recipient, title, message: recipients.append(recipient) or True,
    )
    factory.user(user_id=1, email="jane@example.com")
    UserRepository(session).update_preferences(
        1, {"alert_destinations": {"email": "alerts@jane.example.com"}}
    )
    account = factory.account(balance=Decimal("50.00"))
    factory.alert(
        "account_threshold",
        {"account_id": account.id, "threshold": "100.00", "direction": "below"},
    )

    AlertEvaluator(session, clock=clock, fingerprints=FingerprintCache(0)).evaluate(1)

    assert recipients == ["alerts@jane.example.com"]


def test_email_left_pending_without_sendgrid(session, factory, clock) -> None:
    notification = _fire_low_balance_alert(session, factory, clock)

    assert notification.email_status == DELIVERY_PENDING


def test_no_email_when_alert_disables_it(monkeypatch: pytest.MonkeyPatch, session, factory, clock) -> None:
    sent = []
    monkeypatch.setattr(delivery, "is_email_configured", lambda: True)
    monkeypatch.setattr(delivery, "send_alert_notification_email", lambda *args: sent.append(args))

    notification = _fire_low_balance_alert(session, factory, clock, email_delivery=False)

    assert notification.email_status is None
    assert sent == []
