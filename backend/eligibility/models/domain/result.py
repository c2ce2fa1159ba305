"""Evaluation result domain models."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from eligibility.core.enums import ReasonCode, ReasonKind

# Substituted for an empty reason list when a subject is eligible
ALL_PASSED = "All eligibility criteria passed"


@dataclass
class Reason:
    """
    Structured explanation of one failed check.

    Attributes:
        kind: Where the reason comes from (profile, document, expression, ...)
        code: Machine-readable cause
        field: Attribute, document key or expression the reason refers to
        message: Human-readable explanation
        description: Description of the criterion that produced the reason
        user_value: Value found on the subject, if any
        required_value: Comparison value(s) of the condition, if any
        operator: Operator of the condition, if any
        criterion_key: Key of the criterion the reason belongs to
    """

    kind: ReasonKind
    code: ReasonCode
    field: Optional[str]
    message: str
    description: str = ""
    user_value: Any = None
    required_value: Any = None
    operator: Optional[str] = None
    criterion_key: Optional[str] = None


@dataclass
class CriterionResult:
    """Outcome of one criterion, in scheme order."""

    key: str
    passed: bool
    description: str = ""
    reasons: List[Reason] = field(default_factory=list)


@dataclass
class EvaluationResult:
    """
    Outcome of evaluating one subject against one scheme.

    Attributes:
        is_eligible: Final verdict
        reasons: Accumulated reasons, or ALL_PASSED when eligible without any
        evaluation_results: Criterion key -> passed
        criteria_results: Per-criterion outcomes in scheme order
    """

    is_eligible: bool
    reasons: Union[List[Reason], str] = field(default_factory=list)
    evaluation_results: Dict[str, bool] = field(default_factory=dict)
    criteria_results: List[CriterionResult] = field(default_factory=list)
