"""Progress aggregation: recompute a user's metric for an event from storage."""

import logging
from datetime import datetime, timezone

from sqlalchemy import func
from sqlalchemy.orm import Session

from config import EARLY_USER_CUTOFF
from models.loops import Loop, LoopEntry
from models.referrals import ReferralStats
from models.user import User
from schemas.events import (
    CustomEvent,
    EarlyUserEvent,
    LoopEntriesEvent,
    LoopWinsEvent,
    ReferralsEvent,
    TotalSpentEvent,
)


logger = logging.getLogger(__name__)


class ProgressAggregator:
    """Computes absolute progress values, never increments.

    Every metric is read back from its source of truth so repeated delivery of
    the same event cannot double count.
    """

    def __init__(self, db: Session, early_user_cutoff: datetime = EARLY_USER_CUTOFF):
        self.db = db
        self.early_user_cutoff = _as_utc(early_user_cutoff)
        self._handlers = {
            LoopEntriesEvent: self._loop_entries,
            LoopWinsEvent: self._loop_wins,
            ReferralsEvent: self._referrals,
            TotalSpentEvent: self._total_spent,
            EarlyUserEvent: self._early_user,
            CustomEvent: self._custom,
        }

    @property
    def supported_events(self) -> tuple:
        return tuple(self._handlers)

    def compute(self, user_id: int, event) -> int:
        """Return the user's current value of the metric ``event`` refers to."""
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"No progress handler for event {type(event).__name__}")
        value = handler(user_id, event)
        logger.debug("Progress for user %s on %s: %s", user_id, event.criteria_type, value)
        return value

    def _loop_entries(self, user_id: int, event: LoopEntriesEvent) -> int:
        count = (
            self.db.query(func.count(LoopEntry.id))
            .filter(LoopEntry.wallet_address == event.wallet_address)
            .scalar()
        )
        return count or 0

    def _loop_wins(self, user_id: int, event: LoopWinsEvent) -> int:
        count = (
            self.db.query(func.count(Loop.id))
            .filter(Loop.winner_address == event.wallet_address)
            .scalar()
        )
        return count or 0

    def _referrals(self, user_id: int, event: ReferralsEvent) -> int:
        total = (
            self.db.query(ReferralStats.total_referrals)
            .filter(ReferralStats.user_id == user_id)
            .scalar()
        )
        return total or 0

    def _total_spent(self, user_id: int, event: TotalSpentEvent) -> int:
        total = self.db.query(User.total_spent).filter(User.id == user_id).scalar()
        # Whole currency units; fractional spend never crosses a threshold early.
        return int(total or 0)

    def _early_user(self, user_id: int, event: EarlyUserEvent) -> int:
        created_at = self.db.query(User.created_at).filter(User.id == user_id).scalar()
        if created_at is None:
            return 0
        return 1 if _as_utc(created_at) < self.early_user_cutoff else 0

    def _custom(self, user_id: int, event: CustomEvent) -> int:
        return event.value


def _as_utc(value: datetime) -> datetime:
    """Treat naive datetimes (as returned by SQLite) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
