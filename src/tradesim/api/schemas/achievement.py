"""Pydantic schemas for achievement and game score endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from tradesim.domain.models.enums import AchievementCategory, GameType


class AchievementResponse(BaseModel):
    """Response schema for a single achievement."""

    model_config = {"from_attributes": True}

    achievement_id: str
    title: str
    description: str
    category: AchievementCategory
    progress: Decimal
    max_progress: Decimal
    unlocked: bool
    unlocked_at_est: Optional[datetime] = None


class AchievementListResponse(BaseModel):
    """Response schema for the achievements view."""

    achievements: list[AchievementResponse]
    newly_unlocked: list[str]
    unlocked_count: int
    total: int


class GameScoreRequest(BaseModel):
    """Request schema for recording a game result."""

    game_type: GameType
    points: int = Field(default=0, ge=0)
    correct_predictions: int = Field(default=0, ge=0)


class GameScoreResponse(BaseModel):
    """Response schema for an account's counters of one game."""

    model_config = {"from_attributes": True}

    account_id: str
    game_type: GameType
    score: int
    correct_predictions: int
    total_attempts: int
    updated_at_est: Optional[datetime] = None
