"""Achievement rules and their evaluation against an account snapshot."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional

from tradesim.core.money import ZERO, to_decimal
from tradesim.core.timezone import now_eastern
from tradesim.domain.models import Achievement, AchievementCategory, AchievementUnlock
from tradesim.domain.views import AccountSnapshot, AchievementCounters, AchievementReport
from tradesim.repositories.protocols import AchievementRepository

logger = logging.getLogger(__name__)

Metric = Callable[[AccountSnapshot, AchievementCounters], Decimal]


@dataclass(frozen=True)
class AchievementRule:
    """A threshold over one snapshot or counter metric."""

    achievement_id: str
    title: str
    description: str
    category: AchievementCategory
    threshold: Decimal
    metric: Metric

    def progress(self, snapshot: AccountSnapshot, counters: AchievementCounters) -> Decimal:
        value = to_decimal(self.metric(snapshot, counters))
        return min(max(value, ZERO), self.threshold)

    def is_met(self, snapshot: AccountSnapshot, counters: AchievementCounters) -> bool:
        return to_decimal(self.metric(snapshot, counters)) >= self.threshold


def _transactions(snapshot: AccountSnapshot, counters: AchievementCounters) -> Decimal:
    return Decimal(counters.transaction_count)


def _holdings(snapshot: AccountSnapshot, counters: AchievementCounters) -> Decimal:
    return Decimal(len(snapshot.holdings))


def _total_gain(snapshot: AccountSnapshot, counters: AchievementCounters) -> Decimal:
    return snapshot.total_gain_loss


def _total_value(snapshot: AccountSnapshot, counters: AchievementCounters) -> Decimal:
    return snapshot.total_value


def _quiz_score(snapshot: AccountSnapshot, counters: AchievementCounters) -> Decimal:
    return Decimal(counters.quiz_score)


def _predictions(snapshot: AccountSnapshot, counters: AchievementCounters) -> Decimal:
    return Decimal(counters.correct_predictions)


ACHIEVEMENT_RULES: tuple[AchievementRule, ...] = (
    AchievementRule(
        "first_trade", "First Trade", "Complete your first stock purchase",
        AchievementCategory.TRADING, Decimal("1"), _transactions,
    ),
    AchievementRule(
        "portfolio_builder", "Portfolio Builder", "Own 5 different stocks",
        AchievementCategory.PORTFOLIO, Decimal("5"), _holdings,
    ),
    AchievementRule(
        "day_trader", "Day Trader", "Make 25 trades",
        AchievementCategory.TRADING, Decimal("25"), _transactions,
    ),
    AchievementRule(
        "profit_maker", "Profit Maker", "Earn $1,000 in total profits",
        AchievementCategory.MILESTONE, Decimal("1000"), _total_gain,
    ),
    AchievementRule(
        "diversified_investor", "Diversified Investor", "Own stocks from 3 different holdings",
        AchievementCategory.PORTFOLIO, Decimal("3"), _holdings,
    ),
    AchievementRule(
        "quiz_master", "Quiz Master", "Score 100 points in the investment quiz",
        AchievementCategory.LEARNING, Decimal("100"), _quiz_score,
    ),
    AchievementRule(
        "prediction_expert", "Prediction Expert", "Make 10 correct market predictions",
        AchievementCategory.LEARNING, Decimal("10"), _predictions,
    ),
    AchievementRule(
        "high_roller", "High Roller", "Reach a total portfolio value of $15,000",
        AchievementCategory.MILESTONE, Decimal("15000"), _total_value,
    ),
)


def evaluate_rules(
    snapshot: AccountSnapshot,
    counters: AchievementCounters,
    recorded: Optional[dict[str, AchievementUnlock]] = None,
) -> list[Achievement]:
    """
    Evaluate every rule without touching storage.

    An achievement is shown unlocked if it was recorded earlier or its rule
    holds now; progress always reflects the current state.
    """
    recorded = recorded or {}
    achievements = []
    for rule in ACHIEVEMENT_RULES:
        unlock = recorded.get(rule.achievement_id)
        achievements.append(
            Achievement(
                achievement_id=rule.achievement_id,
                title=rule.title,
                description=rule.description,
                category=rule.category,
                progress=rule.progress(snapshot, counters),
                max_progress=rule.threshold,
                unlocked=unlock is not None or rule.is_met(snapshot, counters),
                unlocked_at_est=unlock.unlocked_at_est if unlock else None,
            )
        )
    return achievements


class AchievementEvaluator:
    """
    Evaluates rules and records first-time unlocks.

    Unlocks are monotonic: once recorded they are never revoked, even if the
    underlying metric later drops below the threshold.
    """

    def __init__(self, achievement_repo: AchievementRepository):
        self._achievement_repo = achievement_repo

    def evaluate(self, snapshot: AccountSnapshot, counters: AchievementCounters) -> AchievementReport:
        """Evaluate all rules and record any that are unlocked for the first time."""
        account_id = snapshot.account_id
        recorded = self._recorded(account_id)
        achievements = evaluate_rules(snapshot, counters, recorded)

        newly_unlocked = []
        for achievement in achievements:
            if not achievement.unlocked or achievement.achievement_id in recorded:
                continue
            unlock = AchievementUnlock(
                account_id=account_id,
                achievement_id=achievement.achievement_id,
                unlocked_at_est=now_eastern(),
            )
            # A concurrent evaluation may have recorded it first
            if self._achievement_repo.record_unlock(unlock):
                achievement.unlocked_at_est = unlock.unlocked_at_est
                newly_unlocked.append(achievement)
                logger.info("Achievement unlocked: %s for account %s", achievement.achievement_id, account_id)

        return AchievementReport(achievements=achievements, newly_unlocked=newly_unlocked)

    def _recorded(self, account_id: str) -> dict[str, AchievementUnlock]:
        return {u.achievement_id: u for u in self._achievement_repo.list_unlocks(account_id)}
