"""Risk questionnaire scoring."""

import logging
from dataclasses import dataclass, field

from tradesim.core.exceptions import IncompleteAssessmentError, ValidationError
from tradesim.domain.models import RiskProfile
from tradesim.domain.views import RiskAnswer, RiskAssessment

logger = logging.getLogger(__name__)

CONSERVATIVE_MAX_SCORE = 16
MODERATE_MAX_SCORE = 26


@dataclass(frozen=True)
class RiskOption:
    text: str
    score: int


@dataclass(frozen=True)
class RiskQuestion:
    question_id: str
    question: str
    options: tuple[RiskOption, ...]

    @property
    def scores(self) -> set[int]:
        return {o.score for o in self.options}


@dataclass(frozen=True)
class RiskProfileDescription:
    profile: RiskProfile
    title: str
    description: str
    target_return: str
    characteristics: list[str] = field(default_factory=list)


def _options(*pairs: tuple[str, int]) -> tuple[RiskOption, ...]:
    return tuple(RiskOption(text, score) for text, score in pairs)


RISK_QUESTIONS: tuple[RiskQuestion, ...] = (
    RiskQuestion(
        "investment_goal",
        "What is your primary goal for investing?",
        _options(
            ("Preserving my money with minimal risk", 1),
            ("Saving for a specific purchase (house, car, etc.)", 2),
            ("Long-term growth for retirement", 3),
            ("Generating regular income", 2),
            ("Maximizing returns regardless of risk", 4),
        ),
    ),
    RiskQuestion(
        "risk_comfort",
        "How comfortable are you with the idea of your investment value "
        "decreasing significantly (e.g., 20%) in a single year?",
        _options(
            ("Very uncomfortable - I would lose sleep", 1),
            ("Slightly uncomfortable but manageable", 2),
            ("Neutral - it's part of investing", 3),
            ("Comfortable - I understand market volatility", 4),
            ("Very comfortable - I see it as a buying opportunity", 5),
        ),
    ),
    RiskQuestion(
        "time_horizon",
        "What is your investment time horizon?",
        _options(
            ("Less than 1 year", 1),
            ("1-3 years", 2),
            ("3-5 years", 3),
            ("5-10 years", 4),
            ("10+ years", 5),
        ),
    ),
    RiskQuestion(
        "income_stability",
        "How stable is your current income?",
        _options(
            ("Very unstable - irregular income", 1),
            ("Somewhat unstable - seasonal work", 2),
            ("Moderately stable - steady job with some uncertainty", 3),
            ("Very stable - secure employment", 4),
            ("Multiple income sources", 5),
        ),
    ),
    RiskQuestion(
        "emergency_fund",
        "Do you have an emergency fund (3-6 months of living expenses) saved?",
        _options(
            ("No emergency fund", 1),
            ("Less than 1 month saved", 2),
            ("1-3 months saved", 3),
            ("3-6 months saved", 4),
            ("More than 6 months saved", 5),
        ),
    ),
    RiskQuestion(
        "investment_experience",
        "What is your experience with investing?",
        _options(
            ("Complete beginner - never invested before", 1),
            ("Some knowledge but no practical experience", 2),
            ("Limited experience with basic investments", 3),
            ("Moderate experience with various investments", 4),
            ("Experienced investor", 5),
        ),
    ),
    RiskQuestion(
        "market_reaction",
        "If your investment portfolio lost 15% in a month, what would you most likely do?",
        _options(
            ("Sell everything immediately to prevent further losses", 1),
            ("Sell some investments to reduce risk", 2),
            ("Hold and wait for recovery", 3),
            ("Buy more while prices are lower", 4),
            ("Analyze the situation and adjust strategy accordingly", 5),
        ),
    ),
)

PROFILE_DESCRIPTIONS: dict[RiskProfile, RiskProfileDescription] = {
    RiskProfile.CONSERVATIVE: RiskProfileDescription(
        profile=RiskProfile.CONSERVATIVE,
        title="Conservative Investor",
        description=(
            "You prefer stability and capital preservation over high returns. "
            "You're comfortable with lower-risk investments."
        ),
        target_return="5-8%",
        characteristics=[
            "Low risk tolerance",
            "Prefers stable, predictable returns",
            "Values capital preservation",
            "Suitable for short-term goals",
        ],
    ),
    RiskProfile.MODERATE: RiskProfileDescription(
        profile=RiskProfile.MODERATE,
        title="Moderate Investor",
        description=(
            "You seek a balance between growth and stability. "
            "You can tolerate some volatility for potentially higher returns."
        ),
        target_return="8-12%",
        characteristics=[
            "Balanced risk tolerance",
            "Seeks growth with some stability",
            "Can handle moderate volatility",
            "Good for medium-term goals",
        ],
    ),
    RiskProfile.AGGRESSIVE: RiskProfileDescription(
        profile=RiskProfile.AGGRESSIVE,
        title="Aggressive Investor",
        description=(
            "You're willing to accept high volatility and risk for the potential "
            "of higher returns over the long term."
        ),
        target_return="12-18%",
        characteristics=[
            "High risk tolerance",
            "Seeks maximum growth potential",
            "Comfortable with high volatility",
            "Ideal for long-term goals",
        ],
    ),
}


class RiskScorer:
    """
    Scores the fixed questionnaire into a risk profile.

    Totals range from 7 (all lowest options) to 34; the profile buckets are
    7-16 conservative, 17-26 moderate, 27 and up aggressive.
    """

    def __init__(self, questions: tuple[RiskQuestion, ...] = RISK_QUESTIONS):
        self._questions = questions
        self._by_id = {q.question_id: q for q in questions}

    def questions(self) -> tuple[RiskQuestion, ...]:
        return self._questions

    def score(self, answers: list[RiskAnswer]) -> int:
        """
        Sum the selected option scores.

        Requires exactly one answer per question.
        """
        seen: set[str] = set()
        total = 0
        for answer in answers:
            question = self._by_id.get(answer.question_id)
            if question is None:
                raise ValidationError(f"Unknown question: {answer.question_id}")
            if answer.question_id in seen:
                raise ValidationError(f"Duplicate answer for question: {answer.question_id}")
            if answer.selected_score not in question.scores:
                raise ValidationError(
                    f"Score {answer.selected_score} is not an option of question {answer.question_id}"
                )
            seen.add(answer.question_id)
            total += answer.selected_score

        missing = [q.question_id for q in self._questions if q.question_id not in seen]
        if missing:
            raise IncompleteAssessmentError(missing)
        return total

    @staticmethod
    def bucket(total_score: int) -> RiskProfile:
        if total_score <= CONSERVATIVE_MAX_SCORE:
            return RiskProfile.CONSERVATIVE
        if total_score <= MODERATE_MAX_SCORE:
            return RiskProfile.MODERATE
        return RiskProfile.AGGRESSIVE

    def assess(self, answers: list[RiskAnswer]) -> RiskAssessment:
        """Score the answers and bucket the total."""
        total = self.score(answers)
        profile = self.bucket(total)
        logger.debug("Risk assessment scored %d -> %s", total, profile.value)
        return RiskAssessment(total_score=total, risk_profile=profile, answers=list(answers))

    @staticmethod
    def describe(profile: RiskProfile) -> RiskProfileDescription:
        return PROFILE_DESCRIPTIONS[profile]
