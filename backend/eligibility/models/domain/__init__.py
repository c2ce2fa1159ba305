"""Domain models for the eligibility engine."""

from eligibility.models.domain.result import (
    ALL_PASSED,
    CriterionResult,
    EvaluationResult,
    Reason,
)
from eligibility.models.domain.scheme import Condition, Criterion, Scheme
from eligibility.models.domain.subject import DocumentRecord, Subject

__all__ = [
    "ALL_PASSED",
    "Condition",
    "Criterion",
    "CriterionResult",
    "DocumentRecord",
    "EvaluationResult",
    "Reason",
    "Scheme",
    "Subject",
]
