"""Pydantic schemas for API request/response."""

from tradesim.api.schemas.account import (
    AccountCreate,
    AccountResponse,
    AccountListResponse,
)
from tradesim.api.schemas.trade import (
    OrderRequest,
    TransactionResponse,
    TransactionListResponse,
)
from tradesim.api.schemas.transfer import (
    TransferRequest,
    TransferResponse,
    TransferListResponse,
)
from tradesim.api.schemas.snapshot import HoldingResponse, SnapshotResponse
from tradesim.api.schemas.achievement import (
    AchievementResponse,
    AchievementListResponse,
    GameScoreRequest,
    GameScoreResponse,
)
from tradesim.api.schemas.risk import (
    RiskOptionResponse,
    RiskQuestionResponse,
    RiskAnswerRequest,
    RiskAssessmentRequest,
    RiskProfileDescriptionResponse,
    RiskAssessmentResponse,
    RiskAlignmentResponse,
)
from tradesim.api.schemas.instrument import InstrumentResponse, InstrumentListResponse

__all__ = [
    "AccountCreate",
    "AccountResponse",
    "AccountListResponse",
    "OrderRequest",
    "TransactionResponse",
    "TransactionListResponse",
    "TransferRequest",
    "TransferResponse",
    "TransferListResponse",
    "HoldingResponse",
    "SnapshotResponse",
    "AchievementResponse",
    "AchievementListResponse",
    "GameScoreRequest",
    "GameScoreResponse",
    "RiskOptionResponse",
    "RiskQuestionResponse",
    "RiskAnswerRequest",
    "RiskAssessmentRequest",
    "RiskProfileDescriptionResponse",
    "RiskAssessmentResponse",
    "RiskAlignmentResponse",
    "InstrumentResponse",
    "InstrumentListResponse",
]
