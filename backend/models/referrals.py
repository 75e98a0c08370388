"""Referral rollups maintained by the referral program."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric
from sqlalchemy.orm import backref, relationship

from database import Base


class ReferralStats(Base):
    """Stores per-user referral totals for quick reads."""

    __tablename__ = "referral_stats"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    total_referrals = Column(Integer, nullable=False, default=0)
    total_commission_earned = Column(Numeric(18, 6), nullable=False, default=0)
    current_tier = Column(Integer, nullable=False, default=1)
    this_month_referrals = Column(Integer, nullable=False, default=0)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    user = relationship(
        "User",
        backref=backref("referral_stats", uselist=False, passive_deletes=True),
    )
