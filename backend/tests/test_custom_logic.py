"""Unit tests for the custom logic expression evaluator."""

import pytest

from eligibility.core.exceptions import ExpressionEvaluationError
from eligibility.services.rule_engine.custom_logic import (
    MAX_DEPTH,
    And,
    CustomLogicEvaluator,
    Identifier,
    Not,
    Or,
    identifiers,
    tokenize,
)


class TestParser:
    """Test cases for tokenizing and parsing."""

    @pytest.fixture
    def evaluator(self):
        return CustomLogicEvaluator()

    def test_tokenize(self):
        tokens = tokenize("C1 && !(C2||C3)")

        assert [t.value for t in tokens] == ["C1", "&&", "!", "(", "C2", "||", "C3", ")", ""]
        assert tokens[-1].kind == "end"

    def test_precedence(self, evaluator):
        node = evaluator.parse("A || B && !C")

        assert node == Or((Identifier("A"), And((Identifier("B"), Not(Identifier("C"))))))

    def test_identifiers_with_punctuation(self, evaluator):
        node = evaluator.parse("income-cap && doc.aadhaar && $x")

        assert identifiers(node) == {"income-cap", "doc.aadhaar", "$x"}

    @pytest.mark.parametrize(
        "expression",
        ["", "   ", "C1 &&", "(C1 || C2", "C1 C2", "C1 & C2", "C1 || )", "C1; import os"],
    )
    def test_syntax_errors(self, evaluator, expression):
        with pytest.raises(ExpressionEvaluationError):
            evaluator.parse(expression)

    def test_error_reports_position(self, evaluator):
        with pytest.raises(ExpressionEvaluationError) as exc_info:
            evaluator.parse("C1 && #")

        assert exc_info.value.details["position"] == 6

    def test_nesting_is_bounded(self, evaluator):
        expression = "(" * (MAX_DEPTH + 1) + "C1" + ")" * (MAX_DEPTH + 1)

        with pytest.raises(ExpressionEvaluationError, match="nested too deeply"):
            evaluator.parse(expression)

    def test_negation_is_bounded(self, evaluator):
        with pytest.raises(ExpressionEvaluationError):
            evaluator.parse("!" * (MAX_DEPTH + 1) + "C1")

    def test_non_string_expression(self, evaluator):
        with pytest.raises(ExpressionEvaluationError):
            evaluator.parse(42)


class TestEvaluate:
    """Test cases for evaluating expressions against criterion outcomes."""

    @pytest.fixture
    def evaluator(self):
        return CustomLogicEvaluator()

    @pytest.mark.parametrize(
        "expression, expected",
        [
            ("C1", False),
            ("!C1", True),
            ("C1 || C2", True),
            ("C1 && C2", False),
            ("!C1 || C2", True),
            ("(C1 || C2) && C3", False),
            ("C2 && !(C1 || C3)", True),
        ],
    )
    def test_truth_table(self, evaluator, expression, expected):
        results = {"C1": False, "C2": True, "C3": False}

        assert evaluator.evaluate(expression, results) is expected

    def test_numeric_criterion_ids(self, evaluator):
        results = {"1": False, "2": True}

        assert evaluator.evaluate("1 || 2", results) is True
        assert evaluator.evaluate("!(1 && 2)", results) is True
        assert identifiers(evaluator.parse("10 && 2b")) == {"10", "2b"}

    def test_unknown_key_detected_despite_short_circuit(self, evaluator):
        with pytest.raises(ExpressionEvaluationError, match="C9"):
            evaluator.evaluate("C2 || C9", {"C2": True})

    def test_non_boolean_outcome(self, evaluator):
        with pytest.raises(ExpressionEvaluationError):
            evaluator.evaluate("C1", {"C1": "yes"})
