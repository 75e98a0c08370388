"""Administrator endpoints for the achievement catalog."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from database import get_db
from models.user import User
from schemas.achievements import (
    AchievementCreate,
    AchievementResponse,
    AchievementStat,
    AchievementUpdate,
    ProgressResponse,
)
from services.achievement_service import AchievementService
from services.admin_service import AchievementAdminService
from services.auth import require_admin
from services.exceptions import AchievementNotFound


logger = logging.getLogger(__name__)

router = APIRouter()


def _not_found(e: AchievementNotFound) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"error": e.code, "message": str(e)},
    )


@router.get("", response_model=list[AchievementResponse])
def list_achievements(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """List the full catalog, including deactivated achievements."""
    return AchievementAdminService(db).list_all()


@router.get("/stats", response_model=list[AchievementStat])
def get_achievement_stats(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Get unlock counts per achievement."""
    return AchievementAdminService(db).unlock_stats()


@router.post("", response_model=AchievementResponse, status_code=status.HTTP_201_CREATED)
def create_achievement(
    payload: AchievementCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return AchievementAdminService(db).create(payload)


@router.patch("/{achievement_id}", response_model=AchievementResponse)
def update_achievement(
    achievement_id: int,
    payload: AchievementUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        return AchievementAdminService(db).update(achievement_id, payload)
    except AchievementNotFound as e:
        raise _not_found(e)


@router.delete("/{achievement_id}", status_code=status.HTTP_204_NO_CONTENT)
def deactivate_achievement(
    achievement_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Soft-delete an achievement. Existing progress rows are kept."""
    try:
        AchievementAdminService(db).deactivate(achievement_id)
    except AchievementNotFound as e:
        raise _not_found(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{achievement_id}/award/{user_id}", response_model=ProgressResponse)
def award_achievement(
    achievement_id: int,
    user_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Unlock an achievement for a user without checking progress."""
    if db.get(User, user_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "user_not_found", "message": f"User {user_id} not found"},
        )

    try:
        row = AchievementService(db, user_id).award(achievement_id)
    except AchievementNotFound as e:
        raise _not_found(e)

    logger.info("Admin %s awarded achievement %s to user %s", admin.id, achievement_id, user_id)
    return row
