"""SQLAlchemy model for user-configured alerts."""

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from pfm_simulator.infrastructure.database import Base, BigIntegerPK
from pfm_simulator.utils import now_in_app_naive_datetime


class AlertModel(Base):
    """Database representation of an alert rule."""

    __tablename__ = "alert"

    id = Column(BigIntegerPK, primary_key=True, index=True)
    user_id = Column(
        BigIntegerPK, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    alert_type = Column(String(40), nullable=False)
    name = Column(String(255), nullable=False)
    source_type = Column(String(40), nullable=True)
    source_id = Column(BigIntegerPK, nullable=True)
    conditions = Column(JSON, nullable=False, default=dict)
    email_delivery = Column(Boolean, nullable=False, default=True)
    sms_delivery = Column(Boolean, nullable=False, default=False)
    active = Column(Boolean, nullable=False, default=True)
    last_triggered_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )
    deleted_at = Column(DateTime, nullable=True)

    user = relationship("UserModel", back_populates="alerts")


__all__ = ["AlertModel"]
