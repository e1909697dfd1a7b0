"""SQLAlchemy model for transaction tags."""

from sqlalchemy import Column, DateTime, ForeignKey, String

from pfm_simulator.infrastructure.database import Base, BigIntegerPK
from pfm_simulator.utils import now_in_app_naive_datetime


class TagModel(Base):
    """Database representation of a user or partner tag."""

    __tablename__ = "tag"

    id = Column(BigIntegerPK, primary_key=True, index=True)
    partner_id = Column(BigIntegerPK, nullable=False)
    user_id = Column(
        BigIntegerPK, ForeignKey("user.id", ondelete="CASCADE"), nullable=True, index=True
    )
    name = Column(String(255), nullable=False)
    parent_tag_id = Column(BigIntegerPK, nullable=True)
    tag_type = Column(String(20), nullable=False, default="user")
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )


__all__ = ["TagModel"]
