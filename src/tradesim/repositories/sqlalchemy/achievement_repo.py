"""SQLAlchemy implementations of AchievementRepository and GameScoreRepository."""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tradesim.core.timezone import to_eastern
from tradesim.domain.models import AchievementUnlock, GameScore, GameType
from tradesim.repositories.sqlalchemy.orm_models import AchievementUnlockORM, GameScoreORM

logger = logging.getLogger(__name__)


class SqlAlchemyAchievementRepository:
    """
    SQLAlchemy-backed achievement unlock ledger.

    record_unlock commits on its own, outside any ledger unit of work.
    """

    def __init__(self, db: Session):
        self._db = db

    def record_unlock(self, unlock: AchievementUnlock) -> bool:
        """Insert the unlock unless it is already recorded. Returns True if inserted."""
        existing = (
            self._db.query(AchievementUnlockORM.seq)
            .filter(
                AchievementUnlockORM.account_id == unlock.account_id,
                AchievementUnlockORM.achievement_id == unlock.achievement_id,
            )
            .first()
        )
        if existing:
            return False

        self._db.add(
            AchievementUnlockORM(
                account_id=unlock.account_id,
                achievement_id=unlock.achievement_id,
                unlocked_at_est=unlock.unlocked_at_est,
            )
        )
        try:
            self._db.commit()
        except IntegrityError:
            # Lost the race to a concurrent evaluation; the unique constraint wins
            self._db.rollback()
            logger.debug(
                "Unlock %s for %s already recorded", unlock.achievement_id, unlock.account_id
            )
            return False
        return True

    def list_unlocks(self, account_id: str) -> list[AchievementUnlock]:
        """List recorded unlocks for an account."""
        orm_unlocks = (
            self._db.query(AchievementUnlockORM)
            .filter(AchievementUnlockORM.account_id == account_id)
            .order_by(AchievementUnlockORM.seq)
            .all()
        )
        return [
            AchievementUnlock(
                account_id=u.account_id,
                achievement_id=u.achievement_id,
                unlocked_at_est=to_eastern(u.unlocked_at_est),
            )
            for u in orm_unlocks
        ]


class SqlAlchemyGameScoreRepository:
    """SQLAlchemy-backed game counters."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, account_id: str, game_type: GameType) -> Optional[GameScore]:
        """Get the counter row for a game type."""
        orm_score = self._get_orm(account_id, game_type)
        return self._to_domain(orm_score) if orm_score else None

    def list_by_account(self, account_id: str) -> list[GameScore]:
        """List all counters of an account."""
        orm_scores = (
            self._db.query(GameScoreORM)
            .filter(GameScoreORM.account_id == account_id)
            .all()
        )
        return [self._to_domain(s) for s in orm_scores]

    def upsert(self, score: GameScore) -> GameScore:
        """Insert or replace a counter row."""
        orm_score = self._get_orm(score.account_id, score.game_type)
        if orm_score is None:
            orm_score = GameScoreORM(account_id=score.account_id, game_type=score.game_type)
            self._db.add(orm_score)

        orm_score.score = score.score
        orm_score.correct_predictions = score.correct_predictions
        orm_score.total_attempts = score.total_attempts
        orm_score.updated_at_est = score.updated_at_est

        self._db.flush()
        return self._to_domain(orm_score)

    def _get_orm(self, account_id: str, game_type: GameType) -> Optional[GameScoreORM]:
        return (
            self._db.query(GameScoreORM)
            .filter(
                GameScoreORM.account_id == account_id,
                GameScoreORM.game_type == game_type,
            )
            .first()
        )

    @staticmethod
    def _to_domain(orm: GameScoreORM) -> GameScore:
        return GameScore(
            account_id=orm.account_id,
            game_type=orm.game_type,
            score=orm.score or 0,
            correct_predictions=orm.correct_predictions or 0,
            total_attempts=orm.total_attempts or 0,
            updated_at_est=to_eastern(orm.updated_at_est) if orm.updated_at_est else None,
        )
