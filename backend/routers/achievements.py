"""Achievement endpoints for players."""

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.orm import Session

from config import NOTIFICATION_AUTO_DISMISS_SECONDS
from database import get_db
from models.user import User
from schemas.achievements import (
    AchievementEventRequest,
    AchievementListResponse,
    AchievementSummary,
    EventResultResponse,
    NotificationsResponse,
    ProgressResponse,
)
from services.achievement_service import AchievementService
from services.auth import get_current_user, user_id_from_authorization
from services.exceptions import ClaimNotAllowed, ProgressNotFound
from services.notification_service import notification_center


def get_user_id_from_request(request: Request) -> str:
    """Extract user ID for rate limiting key."""
    # The limit is checked before dependencies run, so read the token directly
    # Fall back to IP address if no valid token was sent
    user_id = user_id_from_authorization(request.headers.get("Authorization"))
    if user_id is not None:
        return f"user:{user_id}"
    return get_remote_address(request)


limiter = Limiter(key_func=get_user_id_from_request)
router = APIRouter()


@router.get("", response_model=AchievementListResponse)
def get_all_achievements(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Get every active achievement with the user's progress and unlock status."""
    statuses = AchievementService(db, current_user.id).list_with_status()

    return AchievementListResponse(
        achievements=statuses,
        total=len(statuses),
        unlocked_count=sum(1 for s in statuses if s["unlocked"]),
    )


@router.get("/unlocked", response_model=AchievementListResponse)
def get_unlocked_achievements(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Get achievements the user has unlocked."""
    statuses = [
        s for s in AchievementService(db, current_user.id).list_with_status()
        if s["unlocked"]
    ]

    return AchievementListResponse(
        achievements=statuses,
        total=len(statuses),
        unlocked_count=len(statuses),
    )


@router.get("/progress", response_model=list[ProgressResponse])
def get_progress(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Get the user's raw progress rows, newest first."""
    return AchievementService(db, current_user.id).get_user_progress()


@router.post("/events", response_model=EventResultResponse)
@limiter.limit("60/minute")
def report_event(
    request: Request,
    payload: AchievementEventRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Report a gameplay event and evaluate matching achievements.

    Evaluation is best-effort: storage failures are logged and answered with
    an empty unlock list, never an error.

    Rate limit: 60 requests per minute per user, or per IP without a valid token.
    """
    service = AchievementService(db, current_user.id)
    unlocked = service.check_progress(payload.event)

    db.refresh(current_user)
    return EventResultResponse(
        unlocked=[AchievementSummary.model_validate(a) for a in unlocked],
        level=current_user.level,
    )


@router.post("/progress/{progress_id}/claim", response_model=ProgressResponse)
def claim_achievement(
    progress_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Acknowledge an unlocked achievement."""
    service = AchievementService(db, current_user.id)

    try:
        return service.claim(progress_id)
    except ProgressNotFound as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": e.code, "message": str(e)},
        )
    except ClaimNotAllowed as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"error": e.code, "message": str(e)},
        )


@router.get("/notifications", response_model=NotificationsResponse)
def get_notifications(current_user: User = Depends(get_current_user)):
    """Get unlocks not yet dismissed by the client."""
    queue = notification_center.queue_for(current_user.id)
    return NotificationsResponse(
        notifications=queue.pending(),
        auto_dismiss_seconds=NOTIFICATION_AUTO_DISMISS_SECONDS,
    )


@router.delete("/notifications", status_code=status.HTTP_204_NO_CONTENT)
def clear_notifications(current_user: User = Depends(get_current_user)):
    """Dismiss all pending unlock notifications."""
    notification_center.queue_for(current_user.id).clear()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
