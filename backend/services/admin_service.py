"""Administrator operations on the achievement catalog."""

import logging

from sqlalchemy import and_, func
from sqlalchemy.orm import Session

from models.achievements import Achievement, UserAchievementProgress
from schemas.achievements import AchievementCreate, AchievementUpdate
from services.exceptions import AchievementNotFound


logger = logging.getLogger(__name__)


class AchievementAdminService:
    """Catalog CRUD. Definitions are soft-deleted, never removed."""

    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> list[Achievement]:
        """Every achievement, inactive ones included, newest first."""
        return (
            self.db.query(Achievement)
            .order_by(Achievement.created_at.desc(), Achievement.id.desc())
            .all()
        )

    def get(self, achievement_id: int) -> Achievement:
        achievement = self.db.get(Achievement, achievement_id)
        if achievement is None:
            raise AchievementNotFound(achievement_id)
        return achievement

    def create(self, data: AchievementCreate) -> Achievement:
        achievement = Achievement(**data.model_dump())
        self.db.add(achievement)
        self.db.commit()
        self.db.refresh(achievement)
        logger.info("Created achievement %s (%s)", achievement.id, achievement.name)
        return achievement

    def update(self, achievement_id: int, data: AchievementUpdate) -> Achievement:
        """Apply a partial update.

        Existing progress rows keep the target they were created with.
        """
        achievement = self.get(achievement_id)
        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if value is None:
                continue
            setattr(achievement, field, value)
        self.db.commit()
        self.db.refresh(achievement)
        logger.info("Updated achievement %s fields %s", achievement_id, sorted(changes))
        return achievement

    def deactivate(self, achievement_id: int) -> Achievement:
        achievement = self.get(achievement_id)
        if achievement.is_active:
            achievement.is_active = False
            self.db.commit()
            self.db.refresh(achievement)
            logger.info("Deactivated achievement %s", achievement_id)
        return achievement

    def unlock_stats(self) -> list[dict]:
        """Number of users who unlocked each achievement, most unlocked first."""
        unlocked_count = func.count(UserAchievementProgress.id)
        rows = (
            self.db.query(
                Achievement.id,
                Achievement.name,
                Achievement.category,
                unlocked_count.label("unlocked_count"),
            )
            .outerjoin(
                UserAchievementProgress,
                and_(
                    UserAchievementProgress.achievement_id == Achievement.id,
                    UserAchievementProgress.unlocked_at.isnot(None),
                ),
            )
            .group_by(Achievement.id, Achievement.name, Achievement.category)
            .order_by(unlocked_count.desc(), Achievement.id)
            .all()
        )

        return [
            {
                "achievement_id": row.id,
                "name": row.name,
                "category": row.category,
                "unlocked_count": row.unlocked_count,
            }
            for row in rows
        ]
