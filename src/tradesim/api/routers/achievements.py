"""Achievement and game score endpoints."""

from fastapi import APIRouter, Depends

from tradesim.api.deps import get_ledger_service
from tradesim.api.schemas import (
    AchievementResponse,
    AchievementListResponse,
    GameScoreRequest,
    GameScoreResponse,
)
from tradesim.services import LedgerService

router = APIRouter(prefix="/accounts", tags=["achievements"])


@router.get("/{account_id}/achievements", response_model=AchievementListResponse)
def list_achievements(
    account_id: str,
    service: LedgerService = Depends(get_ledger_service),
) -> AchievementListResponse:
    """Evaluate and list every achievement with its progress."""
    report = service.evaluate_achievements(account_id)
    return AchievementListResponse(
        achievements=[AchievementResponse.model_validate(a) for a in report.achievements],
        newly_unlocked=[a.achievement_id for a in report.newly_unlocked],
        unlocked_count=report.unlocked_count,
        total=len(report.achievements),
    )


@router.post("/{account_id}/game-scores", response_model=GameScoreResponse, status_code=201)
def record_game_score(
    account_id: str,
    data: GameScoreRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> GameScoreResponse:
    """Record a quiz or prediction result."""
    score = service.record_game_score(
        account_id,
        data.game_type,
        points=data.points,
        correct_predictions=data.correct_predictions,
    )
    return GameScoreResponse.model_validate(score)
