"""SQLAlchemy model for financial accounts."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Numeric, String

from pfm_simulator.infrastructure.database import Base, BigIntegerPK
from pfm_simulator.utils import now_in_app_naive_datetime


class AccountModel(Base):
    """Database representation of an aggregated or manual account."""

    __tablename__ = "account"

    id = Column(BigIntegerPK, primary_key=True, index=True)
    user_id = Column(
        BigIntegerPK, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    partner_id = Column(BigIntegerPK, nullable=False)
    name = Column(String(255), nullable=False)
    display_name = Column(String(255), nullable=True)
    number = Column(String(64), nullable=False, default="")
    reference_id = Column(String(128), nullable=False, default="")
    account_type = Column(String(40), nullable=False, default="checking")
    display_account_type = Column(String(40), nullable=True)
    balance = Column(Numeric(14, 2), nullable=False, default=0)
    state = Column(String(20), nullable=False, default="active")
    aggregation_type = Column(String(20), nullable=False, default="manual")
    include_in_networth = Column(Boolean, nullable=False, default=True)
    include_in_cashflow = Column(Boolean, nullable=False, default=True)
    include_in_expenses = Column(Boolean, nullable=False, default=True)
    archived_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )


__all__ = ["AccountModel"]
