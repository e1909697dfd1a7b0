"""SQLAlchemy model for recurring cashflow bills."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String

from pfm_simulator.infrastructure.database import Base, BigIntegerPK
from pfm_simulator.utils import now_in_app_naive_datetime


class CashflowBillModel(Base):
    """Database representation of a recurring bill."""

    __tablename__ = "cashflow_bill"

    id = Column(BigIntegerPK, primary_key=True, index=True)
    user_id = Column(
        BigIntegerPK, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    amount = Column(Numeric(14, 2), nullable=False, default=0)
    due_date = Column(Integer, nullable=False)
    recurrence = Column(String(20), nullable=False, default="monthly")
    account_id = Column(BigIntegerPK, nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    stopped_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )
    deleted_at = Column(DateTime, nullable=True)


__all__ = ["CashflowBillModel"]
