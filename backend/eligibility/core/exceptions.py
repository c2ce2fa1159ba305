"""Exception hierarchy for the eligibility engine."""

from typing import Any, Dict, Optional


class EligibilityError(Exception):
    """Base exception for eligibility engine errors."""

    code = "ELIGIBILITY_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to an error payload."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class StructuralError(EligibilityError):
    """Malformed subject or scheme shape, rejected before evaluation."""

    code = "STRUCTURAL_ERROR"


class ConditionError(EligibilityError):
    """Base class for errors raised while evaluating a condition."""

    code = "CONDITION_ERROR"


class UnsupportedOperatorError(ConditionError):
    """Raised when a condition names an operator the engine does not know."""

    code = "UNSUPPORTED_OPERATOR"

    def __init__(self, operator: Any):
        self.operator = operator
        super().__init__(
            f"Unsupported condition: {operator}",
            details={"operator": operator},
        )


class MalformedConditionError(ConditionError):
    """Raised when a condition is missing its operator or has unusable values."""

    code = "MALFORMED_CONDITION"


class UnknownCriterionKindError(EligibilityError):
    """Raised when no rule is registered for a criterion kind."""

    code = "UNKNOWN_CRITERION_KIND"

    def __init__(self, kind: Any):
        self.kind = kind
        super().__init__(
            f"No rule registered for criterion kind: {kind}",
            details={"kind": kind},
        )


class ExpressionEvaluationError(EligibilityError):
    """Raised when a custom logic expression cannot be parsed or evaluated."""

    code = "EXPRESSION_ERROR"


class ItemEvaluationError(EligibilityError):
    """Wraps an unexpected failure while evaluating one batch item."""

    code = "ITEM_ERROR"
