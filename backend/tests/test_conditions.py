"""Unit tests for condition evaluation."""

import math

import pytest

from eligibility.core.enums import Operator, ValueType
from eligibility.core.exceptions import MalformedConditionError, UnsupportedOperatorError
from eligibility.services.rule_engine.conditions import (
    coerce,
    evaluate_condition,
    infer_type,
    normalize_operator,
)
from eligibility.services.rule_engine.reasons import condition_not_met_message, format_requirement


class TestNormalizeOperator:
    """Test cases for operator normalization."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("equals", Operator.EQUALS),
            ("==", Operator.EQUALS),
            ("In", Operator.IN),
            ("Greater Than Equals", Operator.GREATER_OR_EQUAL),
            ("greater_than_equals", Operator.GREATER_OR_EQUAL),
            ("lessThanEquals", Operator.LESS_OR_EQUAL),
            ("<", Operator.LESS_THAN),
            ("greater-than", Operator.GREATER_THAN),
            ("BETWEEN", Operator.BETWEEN),
        ],
    )
    def test_synonyms(self, raw, expected):
        assert normalize_operator(raw) == expected

    def test_unknown_operator(self):
        with pytest.raises(UnsupportedOperatorError) as exc_info:
            normalize_operator("roughly")

        assert "Unsupported condition: roughly" in str(exc_info.value)

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_missing_operator(self, raw):
        with pytest.raises(MalformedConditionError):
            normalize_operator(raw)


class TestTypeInference:
    """Test cases for type inference and coercion."""

    def test_infers_from_first_value(self):
        assert infer_type([9, "x"]) == ValueType.NUMBER
        assert infer_type("12") == ValueType.NUMBER
        assert infer_type(True) == ValueType.BOOLEAN
        assert infer_type("false") == ValueType.BOOLEAN
        assert infer_type(["sc", "st"]) == ValueType.STRING

    def test_unparseable_number_is_nan(self):
        assert math.isnan(coerce("abc", ValueType.NUMBER))

    def test_boolean_strings(self):
        assert coerce("false", ValueType.BOOLEAN) is False
        assert coerce("TRUE", ValueType.BOOLEAN) is True
        assert coerce(0, ValueType.BOOLEAN) is False

    def test_string_rendering(self):
        assert coerce(10.0, ValueType.STRING) == "10"
        assert coerce(True, ValueType.STRING) == "true"
        assert coerce(["a", "b"], ValueType.STRING) == "a"


class TestEvaluateCondition:
    """Test cases for evaluate_condition."""

    @pytest.mark.parametrize("value, expected", [(9, True), (12, True), (8, False), (13, False)])
    def test_between_is_inclusive(self, value, expected):
        assert evaluate_condition(value, "between", [9, 12]) is expected

    def test_in_coerces_user_value(self):
        assert evaluate_condition("9", "in", [9, 12]) is True
        assert evaluate_condition("10", "in", [9, 12]) is False

    def test_in_with_scalar(self):
        assert evaluate_condition("sc", "in", "sc") is True

    def test_equals_strings(self):
        assert evaluate_condition("female", "equals", "female") is True
        assert evaluate_condition("male", "equals", "female") is False

    def test_equals_booleans(self):
        assert evaluate_condition("false", "equals", False) is True
        assert evaluate_condition(True, "equals", "true") is True

    def test_ordering(self):
        assert evaluate_condition(400000, "lte", 270000) is False
        assert evaluate_condition("200000", "lte", "270000") is True
        assert evaluate_condition(18, "gte", 18) is True
        assert evaluate_condition(18, "gt", 18) is False
        assert evaluate_condition(17, "lt", [18]) is True

    def test_non_numeric_compares_false(self):
        assert evaluate_condition("unknown", "gte", 0) is False
        assert evaluate_condition("unknown", "lt", 0) is False
        assert evaluate_condition("unknown", "between", [0, 10]) is False

    def test_falsy_values_are_compared(self):
        assert evaluate_condition(0, "equals", 0) is True
        assert evaluate_condition(False, "equals", False) is True

    def test_between_requires_two_values(self):
        with pytest.raises(MalformedConditionError):
            evaluate_condition(10, "between", [9])
        with pytest.raises(MalformedConditionError):
            evaluate_condition(10, "between", 9)

    def test_unsupported_operator(self):
        with pytest.raises(UnsupportedOperatorError):
            evaluate_condition(10, "approximately", 9)


class TestReasonMessages:
    """Test cases for reason message formatting."""

    def test_format_requirement(self):
        assert format_requirement("lte", 270000, 400000) == "(Required: <= 270000, Got: 400000)"
        assert format_requirement("in", ["sc", "st"], "general") == "(Required: sc, st, Got: general)"
        assert format_requirement("between", [9, 12], 8) == "(Required: between 9, 12, Got: 8)"

    def test_condition_not_met_message(self):
        message = condition_not_met_message("lte", 270000, 400000)

        assert message == "Does not meet criteria: lte (Required: <= 270000, Got: 400000)"
