"""Risk questionnaire and risk alignment endpoints."""

from fastapi import APIRouter, Depends, Query

from tradesim.api.deps import get_instrument_catalog, get_ledger_service, get_risk_scorer
from tradesim.api.schemas import (
    RiskOptionResponse,
    RiskQuestionResponse,
    RiskAssessmentRequest,
    RiskProfileDescriptionResponse,
    RiskAssessmentResponse,
    RiskAlignmentResponse,
)
from tradesim.core.exceptions import InstrumentUnavailableError
from tradesim.domain.views import RiskAnswer, RiskAssessment
from tradesim.services import InstrumentCatalog, LedgerService, RiskScorer

router = APIRouter(prefix="/risk", tags=["risk"])
account_router = APIRouter(prefix="/accounts", tags=["risk"])


def _to_answers(data: RiskAssessmentRequest) -> list[RiskAnswer]:
    return [RiskAnswer(question_id=a.question_id, selected_score=a.selected_score) for a in data.answers]


def _to_response(assessment: RiskAssessment, scorer: RiskScorer) -> RiskAssessmentResponse:
    description = scorer.describe(assessment.risk_profile)
    return RiskAssessmentResponse(
        total_score=assessment.total_score,
        risk_profile=assessment.risk_profile,
        profile=RiskProfileDescriptionResponse(
            title=description.title,
            description=description.description,
            target_return=description.target_return,
            characteristics=list(description.characteristics),
        ),
    )


@router.get("/questions", response_model=list[RiskQuestionResponse])
def list_questions(scorer: RiskScorer = Depends(get_risk_scorer)) -> list[RiskQuestionResponse]:
    """The risk questionnaire."""
    return [
        RiskQuestionResponse(
            question_id=q.question_id,
            question=q.question,
            options=[RiskOptionResponse(text=o.text, score=o.score) for o in q.options],
        )
        for q in scorer.questions()
    ]


@router.post("/score", response_model=RiskAssessmentResponse)
def score_answers(
    data: RiskAssessmentRequest,
    scorer: RiskScorer = Depends(get_risk_scorer),
) -> RiskAssessmentResponse:
    """Score a questionnaire without storing anything."""
    return _to_response(scorer.assess(_to_answers(data)), scorer)


@account_router.post("/{account_id}/risk-assessment", response_model=RiskAssessmentResponse)
def record_assessment(
    account_id: str,
    data: RiskAssessmentRequest,
    service: LedgerService = Depends(get_ledger_service),
    scorer: RiskScorer = Depends(get_risk_scorer),
) -> RiskAssessmentResponse:
    """Score a questionnaire and store the profile on the account."""
    assessment = service.record_risk_assessment(account_id, _to_answers(data))
    return _to_response(assessment, scorer)


@account_router.get("/{account_id}/risk-alignment", response_model=RiskAlignmentResponse)
def risk_alignment(
    account_id: str,
    symbol: str = Query(..., min_length=1),
    service: LedgerService = Depends(get_ledger_service),
    catalog: InstrumentCatalog = Depends(get_instrument_catalog),
) -> RiskAlignmentResponse:
    """Advisory check of an instrument's risk against the account's profile."""
    instrument = catalog.get(symbol)
    if instrument is None:
        raise InstrumentUnavailableError(symbol.upper())
    account = service.get_account(account_id)
    return RiskAlignmentResponse(
        account_id=account_id,
        symbol=instrument.symbol,
        account_risk_profile=account.risk_profile,
        instrument_risk=instrument.risk_category,
        aligned=service.check_risk_alignment(account_id, instrument.risk_category),
    )
