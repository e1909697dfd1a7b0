"""Persistence helpers for transaction entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from pfm_simulator.domain.entities import Transaction
from pfm_simulator.infrastructure.models import TransactionModel
from pfm_simulator.utils import ensure_app_naive_datetime, ensure_app_timezone


class TransactionRepository:
    """Provide persistence operations for :class:`Transaction` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, transaction: Transaction) -> Transaction:
        model = TransactionModel()
        if transaction.id is not None:
            model.id = transaction.id
        self._apply_entity_to_model(model, transaction)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def upsert(self, transaction: Transaction) -> Transaction:
        if transaction.id is None:
            raise ValueError("Transaction id is required for upserts")
        model = self.session.get(TransactionModel, transaction.id)
        if model is None:
            model = TransactionModel(id=transaction.id)
            self.session.add(model)
        self._apply_entity_to_model(model, transaction)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_created_since(
        self,
        user_id: int,
        since: datetime | None,
        *,
        account_id: int | None = None,
    ) -> Sequence[Transaction]:
        """Return the user's transactions created strictly after ``since``."""

        query = (
            self.session.query(TransactionModel)
            .filter(TransactionModel.user_id == user_id)
            .filter(TransactionModel.deleted_at.is_(None))
        )
        if since is not None:
            query = query.filter(
                TransactionModel.created_at > ensure_app_naive_datetime(since)
            )
        if account_id is not None:
            query = query.filter(TransactionModel.account_id == account_id)
        query = query.order_by(TransactionModel.created_at.asc(), TransactionModel.id.asc())
        return [self._to_entity(model) for model in query.all()]

    def list_debits_posted_between(
        self,
        user_id: int,
        start: datetime,
        end: datetime,
        *,
        account_ids: Sequence[int] | None = None,
    ) -> Sequence[Transaction]:
        """Return debit transactions with ``start <= posted_at < end``."""

        query = (
            self.session.query(TransactionModel)
            .filter(TransactionModel.user_id == user_id)
            .filter(TransactionModel.deleted_at.is_(None))
            .filter(TransactionModel.amount < 0)
            .filter(TransactionModel.posted_at >= ensure_app_naive_datetime(start))
            .filter(TransactionModel.posted_at < ensure_app_naive_datetime(end))
        )
        if account_ids:
            query = query.filter(TransactionModel.account_id.in_(list(account_ids)))
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _apply_entity_to_model(model: TransactionModel, transaction: Transaction) -> None:
        model.user_id = transaction.user_id
        model.account_id = transaction.account_id
        model.nickname = transaction.nickname
        model.original_description = transaction.original_description
        model.merchant_name = transaction.merchant_name
        model.description = transaction.description
        model.reference_id = transaction.reference_id or ""
        model.amount = transaction.amount
        model.balance = transaction.balance
        if transaction.posted_at is not None:
            model.posted_at = ensure_app_naive_datetime(transaction.posted_at)
        model.transacted_at = ensure_app_naive_datetime(transaction.transacted_at)
        if transaction.created_at is not None:
            model.created_at = ensure_app_naive_datetime(transaction.created_at)

    @staticmethod
    def _to_entity(model: TransactionModel) -> Transaction:
        return Transaction(
            id=model.id,
            user_id=model.user_id,
            account_id=model.account_id,
            amount=Decimal(model.amount or 0),
            nickname=model.nickname,
            original_description=model.original_description,
            merchant_name=model.merchant_name,
            description=model.description,
            reference_id=model.reference_id or "",
            balance=Decimal(model.balance or 0),
            posted_at=ensure_app_timezone(model.posted_at),
            transacted_at=ensure_app_timezone(model.transacted_at),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            deleted_at=ensure_app_timezone(model.deleted_at),
        )


__all__ = ["TransactionRepository"]
