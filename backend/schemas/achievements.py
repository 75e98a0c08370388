"""Pydantic schemas for achievement endpoints."""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from schemas.events import AchievementEvent


Category = Literal["gameplay", "social", "milestone", "special"]
Rarity = Literal["common", "rare", "epic", "legendary"]


class UnlockCriteria(BaseModel):
    """Predicate an achievement unlocks on: metric ``type`` reaching ``target``."""

    type: str = Field(min_length=1, max_length=64)
    target: int = Field(ge=1)


class AchievementCreate(BaseModel):
    name: str = Field(min_length=1, max_length=128)
    description: str = Field(default="", max_length=512)
    icon: str = Field(default="trophy", max_length=64)
    category: Category
    rarity: Rarity = "common"
    reward_points: int = Field(default=0, ge=0)
    unlock_criteria: UnlockCriteria
    is_active: bool = True


class AchievementUpdate(BaseModel):
    """Partial update; only fields present in the request are applied."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=128)
    description: Optional[str] = Field(default=None, max_length=512)
    icon: Optional[str] = Field(default=None, max_length=64)
    category: Optional[Category] = None
    rarity: Optional[Rarity] = None
    reward_points: Optional[int] = Field(default=None, ge=0)
    unlock_criteria: Optional[UnlockCriteria] = None
    is_active: Optional[bool] = None


class AchievementResponse(BaseModel):
    """Full catalog entry as seen by administrators."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    icon: str
    category: str
    rarity: str
    reward_points: int
    unlock_criteria: Any
    is_active: bool
    created_at: datetime


class AchievementSummary(BaseModel):
    """Achievement fields shown to players, e.g. in unlock notifications."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    icon: str
    category: str
    rarity: str
    reward_points: int


class AchievementStatus(AchievementSummary):
    """Catalog entry combined with the current user's progress."""

    progress_id: Optional[int] = None
    progress: int = 0
    target: Optional[int] = None
    unlocked: bool = False
    unlocked_at: Optional[datetime] = None
    is_claimed: bool = False


class AchievementListResponse(BaseModel):
    achievements: list[AchievementStatus]
    total: int
    unlocked_count: int


class ProgressResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    achievement_id: int
    progress: int
    target: int
    unlocked_at: Optional[datetime]
    is_claimed: bool
    created_at: datetime
    achievement: AchievementSummary


class AchievementEventRequest(BaseModel):
    """Body of ``POST /achievements/events``."""

    event: AchievementEvent


class EventResultResponse(BaseModel):
    unlocked: list[AchievementSummary]
    level: int


class NotificationsResponse(BaseModel):
    notifications: list[AchievementSummary]
    auto_dismiss_seconds: int


class AchievementStat(BaseModel):
    achievement_id: int
    name: str
    category: str
    unlocked_count: int
