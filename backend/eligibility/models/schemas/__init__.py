"""Pydantic schemas for API validation and serialization."""

from eligibility.models.schemas.eligibility import (
    CheckEligibilityRequest,
    CheckEligibilityResponse,
    CheckUsersEligibilityRequest,
    CheckUsersEligibilityResponse,
    ConditionIn,
    CriterionIn,
    CriterionResultResponse,
    EvaluationResultResponse,
    HealthResponse,
    ReasonResponse,
    SchemeIn,
    SubjectIn,
)

__all__ = [
    # Request schemas
    "ConditionIn",
    "CriterionIn",
    "SchemeIn",
    "SubjectIn",
    "CheckEligibilityRequest",
    "CheckUsersEligibilityRequest",
    # Response schemas
    "ReasonResponse",
    "CriterionResultResponse",
    "EvaluationResultResponse",
    "CheckEligibilityResponse",
    "CheckUsersEligibilityResponse",
    "HealthResponse",
]
