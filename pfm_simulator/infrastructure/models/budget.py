"""SQLAlchemy model for monthly budgets."""

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Numeric, String

from pfm_simulator.infrastructure.database import Base, BigIntegerPK
from pfm_simulator.utils import now_in_app_naive_datetime


class BudgetModel(Base):
    """Database representation of a spending budget."""

    __tablename__ = "budget"

    id = Column(BigIntegerPK, primary_key=True, index=True)
    user_id = Column(
        BigIntegerPK, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    budget_amount = Column(Numeric(14, 2), nullable=False, default=0)
    show_on_dashboard = Column(Boolean, nullable=False, default=True)
    account_list = Column(JSON, nullable=False, default=list)
    tag_names = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )
    deleted_at = Column(DateTime, nullable=True)


__all__ = ["BudgetModel"]
