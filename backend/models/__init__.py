"""Model package exports for database initialization."""

from models.user import User
from models.loops import Loop, LoopEntry
from models.referrals import ReferralStats
from models.achievements import Achievement, UserAchievementProgress

__all__ = [
    "User",
    "Loop",
    "LoopEntry",
    "ReferralStats",
    "Achievement",
    "UserAchievementProgress",
]
