"""In-memory queues of freshly unlocked achievements awaiting display."""

from collections import defaultdict
from typing import Iterable

from schemas.achievements import AchievementSummary


class UnlockNotificationQueue:
    """Unlocks for one user's session, oldest first.

    Entries are snapshots, so they stay valid after the ORM session that
    produced them is closed. Dismissal timing is up to the consumer.
    """

    def __init__(self):
        self._items: list[AchievementSummary] = []

    def push(self, achievements: Iterable) -> None:
        for achievement in achievements:
            self._items.append(AchievementSummary.model_validate(achievement))

    def pending(self) -> list[AchievementSummary]:
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)


class NotificationCenter:
    """Process-local registry of notification queues keyed by user id."""

    def __init__(self):
        self._queues: dict[int, UnlockNotificationQueue] = defaultdict(UnlockNotificationQueue)

    def queue_for(self, user_id: int) -> UnlockNotificationQueue:
        return self._queues[user_id]

    def reset(self) -> None:
        self._queues.clear()


notification_center = NotificationCenter()
