"""SQLAlchemy model for account transactions."""

from sqlalchemy import Column, DateTime, ForeignKey, Numeric, String

from pfm_simulator.infrastructure.database import Base, BigIntegerPK
from pfm_simulator.utils import now_in_app_naive_datetime


class TransactionModel(Base):
    """Database representation of a posted transaction."""

    __tablename__ = "transaction"

    id = Column(BigIntegerPK, primary_key=True, index=True)
    user_id = Column(
        BigIntegerPK, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    account_id = Column(
        BigIntegerPK, ForeignKey("account.id", ondelete="CASCADE"), nullable=False, index=True
    )
    nickname = Column(String(255), nullable=True)
    original_description = Column(String(255), nullable=True)
    merchant_name = Column(String(255), nullable=True)
    description = Column(String(255), nullable=True)
    reference_id = Column(String(128), nullable=False, default="")
    amount = Column(Numeric(14, 2), nullable=False, default=0)
    balance = Column(Numeric(14, 2), nullable=False, default=0)
    posted_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime, index=True)
    transacted_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime, index=True)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )
    deleted_at = Column(DateTime, nullable=True)


__all__ = ["TransactionModel"]
