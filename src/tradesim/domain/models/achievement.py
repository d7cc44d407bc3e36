"""Achievement and game score models."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from tradesim.domain.models.enums import AchievementCategory, GameType


@dataclass(frozen=True)
class AchievementUnlock:
    """Recorded unlock event, unique per (account_id, achievement_id)."""

    account_id: str
    achievement_id: str
    unlocked_at_est: datetime


@dataclass
class GameScore:
    """Ancillary learning/game counters for an account."""

    account_id: str
    game_type: GameType
    score: int = 0
    correct_predictions: int = 0
    total_attempts: int = 0
    updated_at_est: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.game_type, str):
            self.game_type = GameType(self.game_type)


@dataclass
class Achievement:
    """Achievement with live progress, as shown to the user."""

    achievement_id: str
    title: str
    description: str
    category: AchievementCategory
    progress: Decimal
    max_progress: Decimal
    unlocked: bool = False
    unlocked_at_est: Optional[datetime] = None
