"""SQLAlchemy model for savings and payoff goals."""

from sqlalchemy import JSON, Column, Date, DateTime, ForeignKey, Numeric, String

from pfm_simulator.infrastructure.database import Base, BigIntegerPK
from pfm_simulator.utils import now_in_app_naive_datetime


class GoalModel(Base):
    """Database representation of a savings or payoff goal."""

    __tablename__ = "goal"

    id = Column(BigIntegerPK, primary_key=True, index=True)
    user_id = Column(
        BigIntegerPK, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    goal_type = Column(String(20), nullable=False, default="savings")
    target_amount = Column(Numeric(14, 2), nullable=False, default=0)
    current_amount = Column(Numeric(14, 2), nullable=False, default=0)
    target_date = Column(Date, nullable=True)
    account_id = Column(BigIntegerPK, nullable=True)
    # ``metadata`` is reserved on declarative classes.
    details = Column("metadata", JSON, nullable=False, default=dict)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )
    archived_at = Column(DateTime, nullable=True)
    deleted_at = Column(DateTime, nullable=True)


__all__ = ["GoalModel"]
