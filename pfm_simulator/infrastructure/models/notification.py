"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from pfm_simulator.infrastructure.database import Base, BigIntegerPK
from pfm_simulator.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation for alert notifications."""

    __tablename__ = "notification"

    id = Column(BigIntegerPK, primary_key=True, index=True)
    user_id = Column(
        BigIntegerPK, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    alert_id = Column(
        BigIntegerPK, ForeignKey("alert.id", ondelete="SET NULL"), nullable=True, index=True
    )
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    details = Column("metadata", JSON, nullable=False, default=dict)
    email_status = Column(String(10), nullable=True)
    sms_status = Column(String(10), nullable=True)
    read = Column(Boolean, nullable=False, default=False)
    read_at = Column(DateTime(), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    deleted_at = Column(DateTime(), nullable=True)

    user = relationship("UserModel", back_populates="notifications")


__all__ = ["NotificationModel"]
