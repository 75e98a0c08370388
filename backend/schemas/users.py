"""Pydantic schemas for user endpoints."""

from pydantic import BaseModel


class LevelResponse(BaseModel):
    """Response for /users/me/level endpoint."""

    level: int
    experience_points: int
