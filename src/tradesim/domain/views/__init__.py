"""View models for service outputs."""

from tradesim.domain.views.portfolio import (
    HoldingView,
    AccountSnapshot,
    PriceUpdate,
    AchievementCounters,
    AchievementReport,
    RiskAnswer,
    RiskAssessment,
)

__all__ = [
    "HoldingView",
    "AccountSnapshot",
    "PriceUpdate",
    "AchievementCounters",
    "AchievementReport",
    "RiskAnswer",
    "RiskAssessment",
]
