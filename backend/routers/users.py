"""User profile endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from models.user import User
from schemas.users import LevelResponse
from services.auth import get_current_user
from services.level_service import recalculate_level


router = APIRouter()


@router.post("/me/level", response_model=LevelResponse)
def recalculate_my_level(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Recompute the user's level from experience points.

    Safe to call repeatedly; the level is a pure function of XP.
    """
    level = recalculate_level(db, current_user.id)
    db.refresh(current_user)

    return LevelResponse(level=level, experience_points=current_user.experience_points)
