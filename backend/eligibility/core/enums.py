"""Core enums for type safety across the engine."""

from enum import Enum
from typing import Optional


class CriterionKind(str, Enum):
    """Criterion kinds, one per rule variant."""

    PROFILE = "profile"
    DOCUMENT = "document"

    @classmethod
    def from_wire(cls, value: Optional[str]) -> Optional["CriterionKind"]:
        """
        Resolve a wire-level kind tag, including legacy names.

        Args:
            value: Kind tag as received (e.g. "profile", "userProfile")

        Returns:
            The matching CriterionKind, or None if the tag is not recognized
        """
        if value is None:
            return None
        return _KIND_SYNONYMS.get(str(value).strip().lower())


_KIND_SYNONYMS = {
    "profile": CriterionKind.PROFILE,
    "userprofile": CriterionKind.PROFILE,
    "document": CriterionKind.DOCUMENT,
    "userdocument": CriterionKind.DOCUMENT,
}


class Operator(str, Enum):
    """Canonical condition operators."""

    EQUALS = "equals"
    IN = "in"
    GREATER_OR_EQUAL = "gte"
    LESS_OR_EQUAL = "lte"
    GREATER_THAN = "gt"
    LESS_THAN = "lt"
    BETWEEN = "between"


class ValueType(str, Enum):
    """Target type inferred from a condition's comparison values."""

    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING = "string"


class ReasonKind(str, Enum):
    """Source of an ineligibility reason."""

    PROFILE = "profile"
    DOCUMENT = "document"
    CRITERION_ERROR = "criterion-error"
    EXPRESSION_ERROR = "expression-error"
    CUSTOM_LOGIC = "custom-logic"


class ReasonCode(str, Enum):
    """Machine-readable cause of an ineligibility reason."""

    MISSING_FIELD = "missing_field"
    MISSING_DOCUMENT = "missing_document"
    DOCUMENT_NOT_ALLOWED = "document_not_allowed"
    DOCUMENT_UNVERIFIED = "document_unverified"
    DOCUMENT_ERROR = "document_error"
    CONDITION_NOT_MET = "condition_not_met"
    UNSUPPORTED_OPERATOR = "unsupported_operator"
    MALFORMED_CONDITION = "malformed_condition"
    UNKNOWN_CRITERION_KIND = "unknown_criterion_kind"
    EXPRESSION_ERROR = "expression_error"
    CUSTOM_LOGIC_NOT_SATISFIED = "custom_logic_not_satisfied"


class ItemStatus(str, Enum):
    """Terminal states of one batch item."""

    ELIGIBLE = "eligible"
    INELIGIBLE = "ineligible"
    ERRORED = "errored"
