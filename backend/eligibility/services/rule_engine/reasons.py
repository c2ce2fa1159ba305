"""Human-readable reason messages for failed criteria."""

from typing import Any

from eligibility.core.enums import Operator
from eligibility.core.exceptions import ConditionError
from eligibility.services.rule_engine.conditions import normalize_operator


def _render(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(_render(v) for v in value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "none"
    return str(value)


def format_requirement(operator: Any, required: Any, actual: Any) -> str:
    """
    Describe what a condition required and what the subject had.

    Examples:
        format_requirement("lte", 270000, 400000)
        -> "(Required: <= 270000, Got: 400000)"
        format_requirement("in", ["sc", "st"], "general")
        -> "(Required: sc, st, Got: general)"
    """
    try:
        resolved = normalize_operator(operator)
    except ConditionError:
        resolved = None

    got = _render(actual)
    if resolved in (Operator.IN, Operator.EQUALS):
        return f"(Required: {_render(required)}, Got: {got})"
    if resolved == Operator.BETWEEN:
        return f"(Required: between {_render(required)}, Got: {got})"
    symbols = {
        Operator.GREATER_OR_EQUAL: ">=",
        Operator.LESS_OR_EQUAL: "<=",
        Operator.GREATER_THAN: ">",
        Operator.LESS_THAN: "<",
    }
    if resolved in symbols:
        return f"(Required: {symbols[resolved]} {_render(required)}, Got: {got})"
    return f"(Condition: {operator}, Required: {_render(required)}, Got: {got})"


def condition_not_met_message(operator: Any, required: Any, actual: Any) -> str:
    """Message for a condition that evaluated to false."""
    return f"Does not meet criteria: {operator} {format_requirement(operator, required, actual)}"
