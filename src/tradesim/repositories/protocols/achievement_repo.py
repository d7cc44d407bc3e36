"""Achievement unlock and game score repository protocols."""

from typing import Protocol, Optional

from tradesim.domain.models import AchievementUnlock, GameScore, GameType


class AchievementRepository(Protocol):
    """Append-only achievement unlock ledger."""

    def record_unlock(self, unlock: AchievementUnlock) -> bool:
        """
        Insert the unlock unless (account_id, achievement_id) already exists.

        Returns True if a new row was recorded.
        """
        ...

    def list_unlocks(self, account_id: str) -> list[AchievementUnlock]:
        """List recorded unlocks for an account."""
        ...


class GameScoreRepository(Protocol):
    """Ancillary learning/game counters."""

    def get(self, account_id: str, game_type: GameType) -> Optional[GameScore]:
        """Get the counter row for a game type."""
        ...

    def list_by_account(self, account_id: str) -> list[GameScore]:
        """List all counters of an account."""
        ...

    def upsert(self, score: GameScore) -> GameScore:
        """Insert or replace a counter row."""
        ...
