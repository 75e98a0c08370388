"""Experience point rewards for unlocked achievements."""

import logging

from sqlalchemy import update
from sqlalchemy.orm import Session

from models.achievements import Achievement
from models.user import User


logger = logging.getLogger(__name__)


def apply_reward(db: Session, user_id: int, achievement: Achievement) -> int:
    """
    Credit ``achievement.reward_points`` to the user's experience points.

    The increment runs in the database so concurrent credits are not lost.
    Does not commit; the caller commits together with the unlock.

    Returns the number of points credited.
    """
    points = achievement.reward_points or 0
    if points <= 0:
        return 0

    result = db.execute(
        update(User)
        .where(User.id == user_id)
        .values(experience_points=User.experience_points + points)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise LookupError(f"User {user_id} not found")

    logger.info(
        "Credited %s XP to user %s for achievement %s", points, user_id, achievement.id
    )
    return points
