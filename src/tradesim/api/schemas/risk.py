"""Pydantic schemas for risk questionnaire endpoints."""

from typing import Optional

from pydantic import BaseModel, Field

from tradesim.domain.models.enums import RiskProfile


class RiskOptionResponse(BaseModel):
    text: str
    score: int


class RiskQuestionResponse(BaseModel):
    question_id: str
    question: str
    options: list[RiskOptionResponse]


class RiskAnswerRequest(BaseModel):
    """One answer: the question and the score of the chosen option."""

    question_id: str
    selected_score: int


class RiskAssessmentRequest(BaseModel):
    """Request schema for scoring a completed questionnaire."""

    answers: list[RiskAnswerRequest] = Field(default_factory=list)


class RiskProfileDescriptionResponse(BaseModel):
    title: str
    description: str
    target_return: str
    characteristics: list[str]


class RiskAssessmentResponse(BaseModel):
    """Response schema for a scored questionnaire."""

    total_score: int
    risk_profile: RiskProfile
    profile: RiskProfileDescriptionResponse


class RiskAlignmentResponse(BaseModel):
    """Advisory check of an instrument against the account's profile."""

    account_id: str
    symbol: str
    account_risk_profile: Optional[RiskProfile] = None
    instrument_risk: RiskProfile
    aligned: bool
