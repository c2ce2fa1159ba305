"""Rule engine orchestrator for evaluating a subject against scheme criteria."""

import logging
from typing import Dict, List, Mapping, Optional, Sequence

from eligibility.core.enums import CriterionKind, ReasonCode, ReasonKind
from eligibility.core.exceptions import (
    ConditionError,
    ExpressionEvaluationError,
    MalformedConditionError,
    UnknownCriterionKindError,
)
from eligibility.models.domain.result import (
    ALL_PASSED,
    CriterionResult,
    EvaluationResult,
    Reason,
)
from eligibility.models.domain.scheme import Criterion, Scheme
from eligibility.models.domain.subject import Subject
from eligibility.services.rule_engine.base import CriterionRule
from eligibility.services.rule_engine.custom_logic import CustomLogicEvaluator
from eligibility.services.rule_engine.evaluators import DocumentRule, ProfileRule
from eligibility.services.rule_engine.verification import DocumentVerifier

logger = logging.getLogger(__name__)


def _error_code(error: Exception) -> ReasonCode:
    if isinstance(error, UnknownCriterionKindError):
        return ReasonCode.UNKNOWN_CRITERION_KIND
    if isinstance(error, MalformedConditionError):
        return ReasonCode.MALFORMED_CONDITION
    return ReasonCode.UNSUPPORTED_OPERATOR


def default_rules(verifier: Optional[DocumentVerifier] = None) -> Dict[CriterionKind, CriterionRule]:
    """
    Build the dispatch table of rules for every known criterion kind.

    Args:
        verifier: Document verification backend for document criteria

    Returns:
        Mapping of CriterionKind to rule instance
    """
    return {
        CriterionKind.PROFILE: ProfileRule(),
        CriterionKind.DOCUMENT: DocumentRule(verifier),
    }


class RuleEngine:
    """
    Criterion evaluation orchestrator.

    This class:
    - Dispatches each criterion to the rule registered for its kind
    - Records one pass/fail entry per criterion key
    - Converts per-criterion errors into reasons so one bad criterion
      does not poison the rest of the scheme
    - Applies custom logic, when given, as the authoritative verdict

    Rules, verifier and custom logic evaluator are handed in once by the
    caller; the engine itself holds no mutable state.
    """

    def __init__(
        self,
        rules: Optional[Mapping[CriterionKind, CriterionRule]] = None,
        custom_logic_evaluator: Optional[CustomLogicEvaluator] = None,
        verifier: Optional[DocumentVerifier] = None,
    ):
        """
        Initialize the rule engine.

        Args:
            rules: Dispatch table; defaults to profile and document rules
            custom_logic_evaluator: Evaluator for scheme custom logic
            verifier: Document verifier used by the default document rule
        """
        self._rules: Dict[CriterionKind, CriterionRule] = dict(
            rules if rules is not None else default_rules(verifier)
        )
        self.custom_logic_evaluator = custom_logic_evaluator or CustomLogicEvaluator()

    def get_rule(self, kind: str) -> CriterionRule:
        """
        Resolve the rule for a criterion kind.

        Raises:
            UnknownCriterionKindError: If no rule is registered for the kind
        """
        resolved = CriterionKind.from_wire(kind)
        rule = self._rules.get(resolved) if resolved is not None else None
        if rule is None:
            raise UnknownCriterionKindError(kind)
        return rule

    def evaluate(
        self,
        subject: Subject,
        criteria: Sequence[Criterion],
        strict_checking: Optional[bool] = None,
        custom_logic: Optional[str] = None,
    ) -> EvaluationResult:
        """
        Evaluate all criteria of a scheme against a subject.

        Args:
            subject: Subject to evaluate
            criteria: Ordered criteria
            strict_checking: Per-request strictness; None defers to each criterion
            custom_logic: Optional expression overriding the all-must-pass verdict

        Returns:
            EvaluationResult with verdict, reasons and per-criterion outcomes
        """
        reasons: List[Reason] = []
        evaluation_results: Dict[str, bool] = {}
        criteria_results: List[CriterionResult] = []

        for criterion in criteria:
            criterion_reasons = self._evaluate_criterion(subject, criterion, strict_checking)
            passed = not criterion_reasons
            key = criterion.key

            # Criteria sharing a key must all pass
            evaluation_results[key] = evaluation_results.get(key, True) and passed
            criteria_results.append(
                CriterionResult(
                    key=key,
                    passed=passed,
                    description=criterion.description or "",
                    reasons=criterion_reasons,
                )
            )
            reasons.extend(criterion_reasons)

        if custom_logic is not None and custom_logic.strip():
            is_eligible = self._apply_custom_logic(custom_logic, evaluation_results, reasons)
        else:
            is_eligible = not reasons

        return EvaluationResult(
            is_eligible=is_eligible,
            reasons=ALL_PASSED if is_eligible and not reasons else reasons,
            evaluation_results=evaluation_results,
            criteria_results=criteria_results,
        )

    def evaluate_scheme(
        self,
        subject: Subject,
        scheme: Scheme,
        strict_checking: Optional[bool] = None,
    ) -> EvaluationResult:
        """Evaluate a subject against a scheme's criteria and custom logic."""
        return self.evaluate(
            subject,
            scheme.criteria,
            strict_checking=strict_checking,
            custom_logic=scheme.custom_logic,
        )

    def _evaluate_criterion(
        self,
        subject: Subject,
        criterion: Criterion,
        strict_checking: Optional[bool],
    ) -> List[Reason]:
        """Run one criterion, converting criterion-level errors into a reason."""
        try:
            rule = self.get_rule(criterion.kind)
            return rule.execute(subject, criterion, strict_checking)
        except (UnknownCriterionKindError, ConditionError) as e:
            logger.warning(f"Criterion '{criterion.key}' could not be evaluated: {e}")
            condition = criterion.condition
            return [
                Reason(
                    kind=ReasonKind.CRITERION_ERROR,
                    code=_error_code(e),
                    field=condition.name,
                    message=f"Invalid criterion: {e}",
                    description=criterion.description or "",
                    required_value=condition.values,
                    operator=condition.operator,
                    criterion_key=criterion.key,
                )
            ]

    def _apply_custom_logic(
        self,
        expression: str,
        evaluation_results: Mapping[str, bool],
        reasons: List[Reason],
    ) -> bool:
        """
        Decide eligibility from the custom logic expression.

        Fails closed: an expression that cannot be evaluated makes the
        subject ineligible and is reported as a reason, never raised.
        """
        try:
            is_eligible = self.custom_logic_evaluator.evaluate(expression, evaluation_results)
        except ExpressionEvaluationError as e:
            logger.warning(f"Custom logic '{expression}' could not be evaluated: {e}")
            reasons.append(
                Reason(
                    kind=ReasonKind.EXPRESSION_ERROR,
                    code=ReasonCode.EXPRESSION_ERROR,
                    field=expression,
                    message=f"Error evaluating eligibility logic: {e}",
                )
            )
            return False

        if not is_eligible and not reasons:
            reasons.append(
                Reason(
                    kind=ReasonKind.CUSTOM_LOGIC,
                    code=ReasonCode.CUSTOM_LOGIC_NOT_SATISFIED,
                    field=expression,
                    message=f"Eligibility logic not satisfied: {expression}",
                )
            )
        return is_eligible
