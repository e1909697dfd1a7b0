"""Persistence helpers for recurring bills."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy.orm import Session

from pfm_simulator.domain.entities import CashflowBill
from pfm_simulator.infrastructure.models import CashflowBillModel
from pfm_simulator.utils import ensure_app_naive_datetime, ensure_app_timezone


class CashflowBillRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, bill_id: int, *, user_id: int | None = None) -> CashflowBill | None:
        query = (
            self.session.query(CashflowBillModel)
            .filter(CashflowBillModel.id == bill_id)
            .filter(CashflowBillModel.deleted_at.is_(None))
        )
        if user_id is not None:
            query = query.filter(CashflowBillModel.user_id == user_id)
        model = query.first()
        return self._to_entity(model) if model else None

    def create(self, bill: CashflowBill) -> CashflowBill:
        model = CashflowBillModel()
        if bill.id is not None:
            model.id = bill.id
        model.user_id = bill.user_id
        model.name = bill.name
        model.amount = bill.amount
        model.due_date = bill.due_date
        model.recurrence = bill.recurrence
        model.account_id = bill.account_id
        model.active = bill.active
        model.stopped_at = ensure_app_naive_datetime(bill.stopped_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: CashflowBillModel) -> CashflowBill:
        return CashflowBill(
            id=model.id,
            user_id=model.user_id,
            name=model.name,
            amount=Decimal(model.amount or 0),
            due_date=model.due_date,
            recurrence=model.recurrence,
            account_id=model.account_id,
            active=model.active,
            stopped_at=ensure_app_timezone(model.stopped_at),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            deleted_at=ensure_app_timezone(model.deleted_at),
        )


__all__ = ["CashflowBillRepository"]
