"""Player level derivation from experience points."""

from typing import Optional

from sqlalchemy.orm import Session

from config import XP_PER_LEVEL
from models.user import User


def level_for_xp(experience_points: Optional[int]) -> int:
    """Level 1 starts at 0 XP; every ``XP_PER_LEVEL`` points adds one level."""
    xp = max(experience_points or 0, 0)
    return xp // XP_PER_LEVEL + 1


def recalculate_level(db: Session, user_id: int) -> int:
    """Recompute the user's level from XP and persist it if it changed."""
    user = db.get(User, user_id)
    if user is None:
        raise LookupError(f"User {user_id} not found")

    level = level_for_xp(user.experience_points)
    if user.level != level:
        user.level = level
        db.commit()
    return level
