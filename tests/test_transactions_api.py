from __future__ import annotations

from decimal import Decimal

URL = "/api/v2/users/1/transactions"


def test_recording_a_transaction_fires_matching_merchant_alert(client, auth_headers, factory) -> None:
    account = factory.account(balance=Decimal("500.00"))
    created = client.post(
        "/api/v2/users/1/alerts/merchant_names",
        json={"name": "Coffee watch", "merchant_pattern": "starbucks"},
        headers=auth_headers,
    )
    assert created.status_code == 201

    response = client.post(
        URL,
        json={
            "transaction": {
                "account_id": account.id,
                "amount": "-4.50",
                "merchant_name": "STARBUCKS #1024",
            }
        },
        headers=auth_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert len(body["transactions"]) == 1
    transaction = body["transactions"][0]
    assert transaction["amount"] == "-4.50"
    assert transaction["balance"] == "500.00"
    assert transaction["merchant_name"] == "STARBUCKS #1024"
    assert body["alert_evaluation"]["fired_count"] == 1

    notifications = client.get(
        "/api/v2/users/1/notifications", headers=auth_headers
    ).json()["notifications"]
    assert notifications[0]["title"] == "Coffee watch"
    assert notifications[0]["alert_type"] == "merchant_name"


def test_transaction_evaluation_skips_balance_alerts(client, auth_headers, factory) -> None:
    account = factory.account(balance=Decimal("10.00"))
    client.post(
        "/api/v2/users/1/alerts/account_thresholds",
        json={"name": "Low", "account_id": account.id, "threshold": "100.00", "direction": "below"},
        headers=auth_headers,
    )
    client.post(
        "/api/v2/users/1/alerts/transaction_limits",
        json={"name": "Big", "amount": "50.00"},
        headers=auth_headers,
    )

    response = client.post(
        URL, json={"account_id": account.id, "amount": "-75.00"}, headers=auth_headers
    )

    assert response.json()["alert_evaluation"] == {
        "evaluated_count": 1,
        "fired_count": 1,
        "suppressed_count": 0,
        "errors": [],
    }


def test_cannot_post_to_another_users_account(client, auth_headers, factory) -> None:
    factory.user(user_id=2)
    foreign = factory.account(user_id=2)

    response = client.post(
        URL, json={"account_id": foreign.id, "amount": "-1.00"}, headers=auth_headers
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Account not found or access denied"


def test_transaction_requires_amount(client, auth_headers, factory) -> None:
    account = factory.account()

    response = client.post(URL, json={"account_id": account.id}, headers=auth_headers)

    assert response.status_code == 422
