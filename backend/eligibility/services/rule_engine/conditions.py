"""Condition evaluation: operator normalization, type inference and coercion."""

import math
import operator as op
from typing import Any, Callable, Dict, Optional, Union

from eligibility.core.enums import Operator, ValueType
from eligibility.core.exceptions import (
    MalformedConditionError,
    UnsupportedOperatorError,
)

Number = Union[int, float]

_OPERATOR_SYNONYMS: Dict[str, Operator] = {
    "equals": Operator.EQUALS,
    "equal": Operator.EQUALS,
    "=": Operator.EQUALS,
    "==": Operator.EQUALS,
    "in": Operator.IN,
    "includes": Operator.IN,
    "gte": Operator.GREATER_OR_EQUAL,
    ">=": Operator.GREATER_OR_EQUAL,
    "greaterthanequals": Operator.GREATER_OR_EQUAL,
    "greaterthanequal": Operator.GREATER_OR_EQUAL,
    "greaterorequal": Operator.GREATER_OR_EQUAL,
    "lte": Operator.LESS_OR_EQUAL,
    "<=": Operator.LESS_OR_EQUAL,
    "lessthanequals": Operator.LESS_OR_EQUAL,
    "lessthanequal": Operator.LESS_OR_EQUAL,
    "lessorequal": Operator.LESS_OR_EQUAL,
    "gt": Operator.GREATER_THAN,
    ">": Operator.GREATER_THAN,
    "greaterthan": Operator.GREATER_THAN,
    "lt": Operator.LESS_THAN,
    "<": Operator.LESS_THAN,
    "lessthan": Operator.LESS_THAN,
    "between": Operator.BETWEEN,
}

_ORDERING: Dict[Operator, Callable[[Any, Any], bool]] = {
    Operator.GREATER_OR_EQUAL: op.ge,
    Operator.LESS_OR_EQUAL: op.le,
    Operator.GREATER_THAN: op.gt,
    Operator.LESS_THAN: op.lt,
}

_BOOLEAN_LITERALS = {"true": True, "false": False}


def normalize_operator(operator: Any) -> Operator:
    """
    Resolve an authored operator name to its canonical Operator.

    Case, whitespace, underscores and hyphens are ignored, so "Greater Than
    Equals", "greater_than_equals" and "gte" all resolve the same way.

    Raises:
        MalformedConditionError: If the operator is missing or blank
        UnsupportedOperatorError: If the operator is not recognized
    """
    if isinstance(operator, Operator):
        return operator
    if operator is None:
        raise MalformedConditionError("Condition operator is required for eligibility check")

    text = "".join(str(operator).lower().split())
    text = text.replace("_", "").replace("-", "")
    if not text:
        raise MalformedConditionError("Condition operator is required for eligibility check")

    resolved = _OPERATOR_SYNONYMS.get(text)
    if resolved is None:
        raise UnsupportedOperatorError(operator)
    return resolved


def _first(value: Any) -> Any:
    """Reduce a list to its first element; scalars pass through."""
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def _parse_number(value: Any) -> Optional[Number]:
    """Parse a numeric value, or None when the value is not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return None if isinstance(value, float) and math.isnan(value) else value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
        return None if math.isnan(number) else number
    return None


def infer_type(compare_values: Any) -> ValueType:
    """Infer the target type from the first comparison value."""
    value = _first(compare_values)
    if isinstance(value, bool):
        return ValueType.BOOLEAN
    if _parse_number(value) is not None:
        return ValueType.NUMBER
    if isinstance(value, str) and value.strip().lower() in _BOOLEAN_LITERALS:
        return ValueType.BOOLEAN
    return ValueType.STRING


def _to_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def coerce(value: Any, value_type: ValueType) -> Any:
    """
    Coerce a value to the inferred type.

    Lists are reduced to their first element. Values that cannot be read as
    numbers become NaN, which compares false against everything.
    """
    value = _first(value)

    if value_type == ValueType.NUMBER:
        if isinstance(value, bool):
            return int(value)
        number = _parse_number(value)
        return math.nan if number is None else number

    if value_type == ValueType.BOOLEAN:
        if isinstance(value, str):
            literal = _BOOLEAN_LITERALS.get(value.strip().lower())
            if literal is not None:
                return literal
        return bool(value)

    return _to_string(value)


def evaluate_condition(user_value: Any, operator: Any, compare_values: Any) -> bool:
    """
    Evaluate one condition against a subject-derived value.

    Args:
        user_value: Value read from the subject or one of its documents
        operator: Operator name (any documented synonym)
        compare_values: One scalar or a list of scalars

    Returns:
        True if the condition holds

    Raises:
        MalformedConditionError: If the operator is missing or between does
            not receive exactly two values
        UnsupportedOperatorError: If the operator is not recognized
    """
    resolved = normalize_operator(operator)
    value_type = infer_type(compare_values)
    actual = coerce(user_value, value_type)

    if resolved == Operator.IN:
        # A scalar is a one-element list, not an automatic failure
        candidates = compare_values if isinstance(compare_values, (list, tuple)) else [compare_values]
        return any(actual == coerce(candidate, value_type) for candidate in candidates)

    if resolved == Operator.BETWEEN:
        if not isinstance(compare_values, (list, tuple)) or len(compare_values) != 2:
            raise MalformedConditionError(
                "Between condition requires an array of two values",
                details={"values": compare_values},
            )
        low, high = (coerce(v, value_type) for v in compare_values)
        return low <= actual <= high

    expected = coerce(compare_values, value_type)
    if resolved == Operator.EQUALS:
        return actual == expected
    return _ORDERING[resolved](actual, expected)
