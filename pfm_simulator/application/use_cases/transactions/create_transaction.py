"""Use case for recording a manual transaction and reacting to it."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from pfm_simulator.application.use_cases.alert_evaluation import (
    AlertEvaluator,
    EvaluationResult,
)
from pfm_simulator.domain.entities import TRANSACTION_ALERT_TYPES, Transaction
from pfm_simulator.infrastructure.repositories import (
    AccountRepository,
    TransactionRepository,
)
from pfm_simulator.utils import Clock, now_in_app_timezone

logger = logging.getLogger(__name__)


@dataclass
class TransactionCreationResult:
    transaction: Transaction
    evaluation: EvaluationResult


def create_transaction(
    session: Session,
    user_id: int,
    *,
    account_id: int,
    amount: Decimal,
    merchant_name: str | None = None,
    description: str | None = None,
    nickname: str | None = None,
    original_description: str | None = None,
    posted_at: datetime | None = None,
    clock: Clock = now_in_app_timezone,
) -> TransactionCreationResult:
    """Persist a transaction then evaluate the user's transaction-driven alerts."""

    account = AccountRepository(session).get(account_id, user_id=user_id)
    if account is None:
        raise ValueError("Account not found or access denied")

    now = clock()
    transaction = TransactionRepository(session).create(
        Transaction(
            id=None,
            user_id=user_id,
            account_id=account_id,
            amount=amount,
            merchant_name=merchant_name,
            description=description,
            nickname=nickname,
            original_description=original_description,
            balance=account.balance,
            posted_at=posted_at or now,
            created_at=now,
        )
    )

    evaluation = AlertEvaluator(session, clock=clock).evaluate(
        user_id, alert_types=TRANSACTION_ALERT_TYPES
    )
    if evaluation.errors:
        logger.warning(
            "Transaction %s evaluation finished with %s alert errors",
            transaction.id,
            len(evaluation.errors),
        )
    return TransactionCreationResult(transaction=transaction, evaluation=evaluation)


__all__ = ["TransactionCreationResult", "create_transaction"]
