"""Rule engine for evaluating subjects against scheme eligibility criteria."""

from typing import Optional, Sequence

from eligibility.models.domain.result import EvaluationResult
from eligibility.models.domain.scheme import Criterion
from eligibility.models.domain.subject import Subject

from .base import CriterionRule, resolve_strict_checking
from .conditions import evaluate_condition, normalize_operator
from .custom_logic import CustomLogicEvaluator
from .engine import RuleEngine, default_rules
from .verification import DocumentVerifier, FlagDocumentVerifier


def evaluate_subject_against_scheme(
    subject: Subject,
    criteria: Sequence[Criterion],
    strict_checking: Optional[bool] = None,
    engine: Optional[RuleEngine] = None,
) -> EvaluationResult:
    """Evaluate a subject against criteria with the all-must-pass verdict."""
    return (engine or RuleEngine()).evaluate(subject, criteria, strict_checking)


def evaluate_subject_against_scheme_with_logic(
    subject: Subject,
    criteria: Sequence[Criterion],
    custom_logic: Optional[str],
    strict_checking: Optional[bool] = None,
    engine: Optional[RuleEngine] = None,
) -> EvaluationResult:
    """Evaluate a subject against criteria, letting custom logic decide the verdict."""
    return (engine or RuleEngine()).evaluate(
        subject,
        criteria,
        strict_checking=strict_checking,
        custom_logic=custom_logic,
    )


__all__ = [
    "CriterionRule",
    "CustomLogicEvaluator",
    "DocumentVerifier",
    "FlagDocumentVerifier",
    "RuleEngine",
    "default_rules",
    "evaluate_condition",
    "evaluate_subject_against_scheme",
    "evaluate_subject_against_scheme_with_logic",
    "normalize_operator",
    "resolve_strict_checking",
]
