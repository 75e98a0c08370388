"""Achievement evaluation: progress tracking, unlocks, rewards and claims."""

import json
import logging
from datetime import datetime, timezone
from typing import NamedTuple, Optional

from sqlalchemy import case, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from models.achievements import Achievement, UserAchievementProgress
from services.exceptions import AchievementNotFound, ClaimNotAllowed, ProgressNotFound
from services.level_service import recalculate_level
from services.notification_service import NotificationCenter, notification_center
from services.progress_service import ProgressAggregator
from services.reward_service import apply_reward


logger = logging.getLogger(__name__)


class Criteria(NamedTuple):
    type: str
    target: int


def parse_criteria(raw) -> Optional[Criteria]:
    """Return the ``(type, target)`` pair of stored unlock criteria, or None if malformed.

    Criteria saved as a JSON string by older admin tooling are decoded first.
    """
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            return None
    if not isinstance(raw, dict):
        return None

    criteria_type = raw.get("type")
    target = raw.get("target")
    if not isinstance(criteria_type, str) or not criteria_type:
        return None
    if isinstance(target, bool) or not isinstance(target, (int, float)):
        return None
    if isinstance(target, float):
        if not target.is_integer():
            return None
        target = int(target)
    if target < 0:
        return None
    return Criteria(criteria_type, target)


class AchievementService:
    """Evaluates and manages achievements for a single user."""

    def __init__(
        self,
        db: Session,
        user_id: int,
        notifications: Optional[NotificationCenter] = None,
        aggregator: Optional[ProgressAggregator] = None,
    ):
        self.db = db
        self.user_id = user_id
        self.notifications = notifications or notification_center
        self.aggregator = aggregator or ProgressAggregator(db)

    def check_progress(self, event) -> list[Achievement]:
        """
        Evaluate ``event`` without ever raising.

        Achievement tracking must not fail the gameplay action that triggered
        it, so errors are logged and an empty list is returned. Fresh unlocks
        are queued for display and the user's level is recalculated.
        """
        try:
            unlocked = self.evaluate(event)
        except Exception:
            self.db.rollback()
            logger.exception(
                "Achievement check failed for user %s on event %s",
                self.user_id,
                event.criteria_type,
            )
            return []

        if not unlocked:
            return []

        self.notifications.queue_for(self.user_id).push(unlocked)
        self._refresh_level()
        return unlocked

    def evaluate(self, event) -> list[Achievement]:
        """
        Record progress for every active achievement matching ``event``.

        Returns achievements that were unlocked by this call. Each achievement
        is committed on its own; an error aborts the remaining ones.
        """
        matching = self._matching_achievements(event.criteria_type)
        if not matching:
            return []

        current = self.aggregator.compute(self.user_id, event)

        unlocked = []
        for achievement, criteria in matching:
            if self._record_progress(achievement, criteria.target, current):
                unlocked.append(achievement)

        if unlocked:
            logger.info(
                "User %s unlocked %s on event %s",
                self.user_id,
                [a.id for a in unlocked],
                event.criteria_type,
            )
        return unlocked

    def award(self, achievement_id: int) -> UserAchievementProgress:
        """Unlock an achievement directly, regardless of progress.

        Experience points are credited, and the level recalculated, only if the
        achievement was still locked.
        """
        achievement = self.db.get(Achievement, achievement_id)
        if achievement is None:
            raise AchievementNotFound(achievement_id)

        criteria = parse_criteria(achievement.unlock_criteria)
        target = criteria.target if criteria else 0
        now = _utcnow()

        row = self._get_progress_row(achievement_id)
        if row is None:
            row = UserAchievementProgress(
                user_id=self.user_id,
                achievement_id=achievement_id,
                progress=target,
                target=target,
                unlocked_at=now,
            )
            self.db.add(row)
            self.db.flush()
            newly_unlocked = True
        else:
            result = self.db.execute(
                update(UserAchievementProgress)
                .where(
                    UserAchievementProgress.id == row.id,
                    UserAchievementProgress.unlocked_at.is_(None),
                )
                .values(
                    unlocked_at=now,
                    progress=case(
                        (UserAchievementProgress.progress < target, target),
                        else_=UserAchievementProgress.progress,
                    ),
                )
                .execution_options(synchronize_session=False)
            )
            newly_unlocked = result.rowcount == 1

        if newly_unlocked:
            apply_reward(self.db, self.user_id, achievement)
        self.db.commit()
        self.db.refresh(row)

        if newly_unlocked:
            logger.info("Achievement %s awarded to user %s", achievement_id, self.user_id)
            self.notifications.queue_for(self.user_id).push([achievement])
            self._refresh_level()
        return row

    def claim(self, progress_id: int) -> UserAchievementProgress:
        """Mark an unlocked achievement as claimed by its owner.

        Claiming is an acknowledgement only; it does not grant experience points.
        """
        row = self.db.get(UserAchievementProgress, progress_id)
        if row is None or row.user_id != self.user_id:
            raise ProgressNotFound(progress_id)
        if row.unlocked_at is None:
            raise ClaimNotAllowed(progress_id)

        if not row.is_claimed:
            row.is_claimed = True
            self.db.commit()
            self.db.refresh(row)
        return row

    def get_user_progress(self) -> list[UserAchievementProgress]:
        return (
            self.db.query(UserAchievementProgress)
            .options(joinedload(UserAchievementProgress.achievement))
            .filter(UserAchievementProgress.user_id == self.user_id)
            .order_by(
                UserAchievementProgress.created_at.desc(),
                UserAchievementProgress.id.desc(),
            )
            .all()
        )

    def list_with_status(self) -> list[dict]:
        """All active achievements with this user's progress merged in."""
        achievements = (
            self.db.query(Achievement)
            .filter(Achievement.is_active.is_(True))
            .order_by(Achievement.category, Achievement.id)
            .all()
        )
        rows = {
            row.achievement_id: row
            for row in self.db.query(UserAchievementProgress)
            .filter(UserAchievementProgress.user_id == self.user_id)
            .all()
        }

        statuses = []
        for achievement in achievements:
            row = rows.get(achievement.id)
            criteria = parse_criteria(achievement.unlock_criteria)
            statuses.append({
                "id": achievement.id,
                "name": achievement.name,
                "description": achievement.description,
                "icon": achievement.icon,
                "category": achievement.category,
                "rarity": achievement.rarity,
                "reward_points": achievement.reward_points,
                "progress_id": row.id if row else None,
                "progress": row.progress if row else 0,
                "target": row.target if row else (criteria.target if criteria else None),
                "unlocked": bool(row and row.unlocked_at),
                "unlocked_at": row.unlocked_at if row else None,
                "is_claimed": bool(row and row.is_claimed),
            })
        return statuses

    def _refresh_level(self) -> None:
        try:
            recalculate_level(self.db, self.user_id)
        except Exception:
            self.db.rollback()
            logger.exception("Level recalculation failed for user %s", self.user_id)

    def _matching_achievements(self, criteria_type: str) -> list[tuple[Achievement, Criteria]]:
        achievements = (
            self.db.query(Achievement)
            .filter(Achievement.is_active.is_(True))
            .order_by(Achievement.id)
            .all()
        )

        matching = []
        for achievement in achievements:
            criteria = parse_criteria(achievement.unlock_criteria)
            if criteria is None:
                logger.warning(
                    "Skipping achievement %s with malformed unlock criteria %r",
                    achievement.id,
                    achievement.unlock_criteria,
                )
                continue
            if criteria.type == criteria_type:
                matching.append((achievement, criteria))
        return matching

    def _get_progress_row(self, achievement_id: int) -> Optional[UserAchievementProgress]:
        return (
            self.db.query(UserAchievementProgress)
            .filter(
                UserAchievementProgress.user_id == self.user_id,
                UserAchievementProgress.achievement_id == achievement_id,
            )
            .first()
        )

    def _record_progress(self, achievement: Achievement, target: int, current: int) -> bool:
        """Store ``current`` for one achievement; return True on a fresh unlock.

        Unlock flag and XP credit are committed together.
        """
        now = _utcnow()

        row = self._get_progress_row(achievement.id)
        if row is None:
            row = UserAchievementProgress(
                user_id=self.user_id,
                achievement_id=achievement.id,
                progress=current,
                target=target,
                unlocked_at=now if current >= target else None,
            )
            self.db.add(row)
            try:
                self.db.flush()
            except IntegrityError:
                # A concurrent evaluation created the row; update it below.
                self.db.rollback()
                logger.info(
                    "Progress row for user %s achievement %s already exists",
                    self.user_id,
                    achievement.id,
                )
            else:
                newly_unlocked = row.unlocked_at is not None
                if newly_unlocked:
                    apply_reward(self.db, self.user_id, achievement)
                self.db.commit()
                return newly_unlocked

        self.db.execute(
            update(UserAchievementProgress)
            .where(
                UserAchievementProgress.user_id == self.user_id,
                UserAchievementProgress.achievement_id == achievement.id,
            )
            .values(progress=current)
            .execution_options(synchronize_session=False)
        )
        # Only the evaluation that flips unlocked_at from NULL sees a row here.
        result = self.db.execute(
            update(UserAchievementProgress)
            .where(
                UserAchievementProgress.user_id == self.user_id,
                UserAchievementProgress.achievement_id == achievement.id,
                UserAchievementProgress.unlocked_at.is_(None),
                UserAchievementProgress.progress >= UserAchievementProgress.target,
            )
            .values(unlocked_at=now)
            .execution_options(synchronize_session=False)
        )
        newly_unlocked = result.rowcount == 1
        if newly_unlocked:
            apply_reward(self.db, self.user_id, achievement)
        self.db.commit()
        return newly_unlocked


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)
