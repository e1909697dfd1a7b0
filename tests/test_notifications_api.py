from __future__ import annotations

import pytest
from starlette.websockets import WebSocketDisconnect

BASE = "/api/v2/users/1/notifications"


def test_lists_notifications_with_meta(client, auth_headers, factory) -> None:
    older = factory.notification(title="Older")
    newer = factory.notification(title="Newer")
    factory.user(user_id=2)
    factory.notification(user_id=2, title="Not mine")

    response = client.get(BASE, headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert [item["id"] for item in body["notifications"]] == [newer.id, older.id]
    assert body["notifications"][0]["alert_type"] == "account_threshold"
    assert body["notifications"][0]["read"] is False
    assert body["meta"] == {"current_page": 1, "per_page": 25, "unread_count": 2}


def test_filters_and_paginates(client, auth_headers, factory) -> None:
    notifications = [factory.notification(title=f"N{index}") for index in range(3)]
    client.put(f"{BASE}/{notifications[0].id}/read", headers=auth_headers)

    unread = client.get(BASE, params={"read": "false"}, headers=auth_headers).json()
    read = client.get(BASE, params={"read": "true"}, headers=auth_headers).json()
    second_page = client.get(BASE, params={"page": 2, "per_page": 2}, headers=auth_headers).json()

    assert len(unread["notifications"]) == 2
    assert [item["id"] for item in read["notifications"]] == [notifications[0].id]
    assert [item["id"] for item in second_page["notifications"]] == [notifications[0].id]
    assert second_page["meta"]["current_page"] == 2
    assert second_page["meta"]["unread_count"] == 2


def test_mark_read_is_idempotent(client, auth_headers, factory) -> None:
    notification = factory.notification()

    first = client.put(f"{BASE}/{notification.id}/read", headers=auth_headers)
    second = client.put(f"{BASE}/{notification.id}/read", headers=auth_headers)

    assert first.status_code == 200
    assert first.json()["notification"]["read"] is True
    assert first.json()["notification"]["read_at"] is not None
    assert second.json()["notification"]["read_at"] == first.json()["notification"]["read_at"]


def test_read_all_reports_updated_count(client, auth_headers, factory) -> None:
    factory.notification()
    factory.notification()

    first = client.put(f"{BASE}/read_all", headers=auth_headers)
    second = client.put(f"{BASE}/read_all", headers=auth_headers)

    assert first.json() == {"updated_count": 2}
    assert second.json() == {"updated_count": 0}


def test_get_and_delete_notification(client, auth_headers, factory) -> None:
    notification = factory.notification()
    factory.user(user_id=2)
    foreign = factory.notification(user_id=2)

    assert client.get(f"{BASE}/{notification.id}", headers=auth_headers).status_code == 200
    assert client.get(f"{BASE}/{foreign.id}", headers=auth_headers).status_code == 404
    assert client.delete(f"{BASE}/{notification.id}", headers=auth_headers).status_code == 204
    assert client.get(f"{BASE}/{notification.id}", headers=auth_headers).status_code == 404
    assert client.delete(f"{BASE}/{notification.id}", headers=auth_headers).status_code == 404


def test_alert_destinations_default_to_account_email(client, auth_headers) -> None:
    response = client.get("/api/v2/users/1/alert_destinations", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["destinations"] == {
        "email": "jane@example.com",
        "sms": None,
        "email_verified": False,
        "sms_verified": False,
    }


def test_update_alert_destinations(client, auth_headers) -> None:
    url = "/api/v2/users/1/alert_destinations"

    updated = client.put(
        url,
        json={"destinations": {"email": "alerts@example.com", "sms": "+15551234567"}},
        headers=auth_headers,
    )
    bad_sms = client.put(url, json={"sms": "call me"}, headers=auth_headers)
    bad_email = client.put(url, json={"email": "not-an-email"}, headers=auth_headers)

    assert updated.status_code == 200
    assert updated.json()["destinations"]["email"] == "alerts@example.com"
    assert updated.json()["destinations"]["sms"] == "+15551234567"
    assert bad_sms.status_code == 422
    assert bad_email.status_code == 422
    assert client.get(url, headers=auth_headers).json()["destinations"]["sms"] == "+15551234567"


def _token(headers: dict[str, str]) -> str:
    return headers["Authorization"].removeprefix("Bearer ")


def test_websocket_sends_unread_then_answers_ping(client, auth_headers, factory) -> None:
    unread = factory.notification(title="Unread")
    already_read = factory.notification(title="Read")
    client.put(f"{BASE}/{already_read.id}/read", headers=auth_headers)

    with client.websocket_connect(f"/api/v2/notifications/ws?token={_token(auth_headers)}") as ws:
        init = ws.receive_json()
        ws.send_json({"type": "ping"})
        pong = ws.receive_json()

    assert init["type"] == "init"
    assert [item["id"] for item in init["data"]] == [unread.id]
    assert init["data"][0]["title"] == "Unread"
    assert pong == {"type": "pong"}


def test_websocket_ack_marks_notifications_read(client, auth_headers, factory) -> None:
    notification = factory.notification()

    with client.websocket_connect(f"/api/v2/notifications/ws?token={_token(auth_headers)}") as ws:
        ws.receive_json()
        ws.send_json({"type": "ack", "ids": [notification.id, 999]})
        ws.send_json({"type": "ping"})
        assert ws.receive_json() == {"type": "pong"}

    fetched = client.get(f"{BASE}/{notification.id}", headers=auth_headers).json()
    assert fetched["notification"]["read"] is True


@pytest.mark.parametrize("query", ["", "?token=garbage"])
def test_websocket_rejects_missing_or_invalid_token(client, query) -> None:
    with pytest.raises(WebSocketDisconnect) as excinfo:
        with client.websocket_connect(f"/api/v2/notifications/ws{query}") as ws:
            ws.receive_json()

    assert excinfo.value.code == 1008
