"""Achievements catalog and per-user progress rows."""

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    JSON,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import backref, relationship

from database import Base


class Achievement(Base):
    """Defines an unlockable achievement with JSON criteria ``{"type", "target"}``."""

    __tablename__ = "achievements"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(128), nullable=False)
    description = Column(String(512), nullable=False, default="")
    icon = Column(String(64), nullable=False, default="trophy")
    category = Column(String(16), nullable=False)  # gameplay | social | milestone | special
    rarity = Column(String(16), nullable=False, default="common")  # common | rare | epic | legendary
    reward_points = Column(Integer, nullable=False, default=0)
    unlock_criteria = Column(JSON, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)

    progress_rows = relationship("UserAchievementProgress", back_populates="achievement")


class UserAchievementProgress(Base):
    """Tracks one user's progress towards one achievement.

    ``unlocked_at`` is set once and never cleared. ``is_claimed`` is a separate
    acknowledgement flag and has no bearing on experience points.
    """

    __tablename__ = "user_achievement_progress"
    __table_args__ = (
        UniqueConstraint("user_id", "achievement_id", name="uq_user_achievement_progress"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    achievement_id = Column(
        Integer,
        ForeignKey("achievements.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    progress = Column(Integer, nullable=False, default=0)
    target = Column(Integer, nullable=False)
    unlocked_at = Column(DateTime, nullable=True)
    is_claimed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)

    user = relationship("User", backref=backref("achievement_progress", passive_deletes=True))
    achievement = relationship("Achievement", back_populates="progress_rows")
