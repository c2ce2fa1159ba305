"""Rule engine foundation: the abstract criterion rule."""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from eligibility.core.enums import ReasonCode, ReasonKind
from eligibility.models.domain.result import Reason
from eligibility.models.domain.scheme import Condition, Criterion
from eligibility.models.domain.subject import Subject
from eligibility.services.rule_engine.conditions import evaluate_condition
from eligibility.services.rule_engine.reasons import condition_not_met_message


def resolve_strict_checking(
    request_flag: Optional[bool],
    criterion_default: Optional[bool],
) -> bool:
    """
    Resolve the effective strictness for one criterion.

    An explicit per-request flag wins over the criterion's own default;
    with neither present, checking is lenient.
    """
    if request_flag is not None:
        return bool(request_flag)
    return bool(criterion_default)


class CriterionRule(ABC):
    """
    Abstract base class for criterion rules using the Strategy pattern.

    Each concrete rule knows how to read the value a criterion refers to
    from the subject for one criterion kind, and turns the outcome into
    a list of Reasons. An empty list means the criterion passed.
    """

    kind: ReasonKind

    @abstractmethod
    def extract_value(self, subject: Subject, condition: Condition) -> Any:
        """
        Read the value a condition refers to.

        Args:
            subject: Subject being evaluated
            condition: Condition of the criterion

        Returns:
            The value, or None when absent
        """

    @abstractmethod
    def execute(
        self,
        subject: Subject,
        criterion: Criterion,
        strict_checking: Optional[bool],
    ) -> List[Reason]:
        """
        Evaluate a criterion against a subject.

        Args:
            subject: Subject being evaluated
            criterion: Criterion to check
            strict_checking: Per-request strictness; None defers to the criterion

        Returns:
            Reasons for failure, empty if the criterion passed

        Raises:
            UnsupportedOperatorError: If the condition's operator is unknown
            MalformedConditionError: If the condition is unusable
        """

    def _reason(
        self,
        criterion: Criterion,
        code: ReasonCode,
        field: Optional[str],
        message: str,
        **extra: Any,
    ) -> Reason:
        """Build a Reason attributed to the given criterion."""
        return Reason(
            kind=self.kind,
            code=code,
            field=field,
            message=message,
            description=criterion.description or "",
            criterion_key=criterion.key,
            **extra,
        )

    def _check_condition(
        self,
        criterion: Criterion,
        value: Any,
        strict: bool,
        missing_message: str,
    ) -> List[Reason]:
        """
        Run the Condition Evaluator on an extracted value.

        A missing value (None only; 0, False and "" are present values)
        blocks the criterion in strict mode and is vacuously satisfied
        otherwise.
        """
        condition = criterion.condition
        if value is None:
            if strict:
                return [
                    self._reason(
                        criterion,
                        ReasonCode.MISSING_FIELD,
                        condition.name,
                        missing_message,
                    )
                ]
            return []

        if evaluate_condition(value, condition.operator, condition.values):
            return []

        return [
            self._reason(
                criterion,
                ReasonCode.CONDITION_NOT_MET,
                condition.name,
                condition_not_met_message(condition.operator, condition.values, value),
                user_value=value,
                required_value=condition.values,
                operator=condition.operator,
            )
        ]
