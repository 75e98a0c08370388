# Schemas package

from .events import (
    AchievementEvent,
    CustomEvent,
    EarlyUserEvent,
    LoopEntriesEvent,
    LoopWinsEvent,
    ReferralsEvent,
    TotalSpentEvent,
)

from .achievements import (
    AchievementCreate,
    AchievementUpdate,
    AchievementResponse,
    AchievementSummary,
    AchievementStatus,
    AchievementListResponse,
    ProgressResponse,
    UnlockCriteria,
)

from .users import LevelResponse
