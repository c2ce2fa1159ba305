"""Profile attribute rule."""

from typing import Any, List, Optional

from eligibility.core.enums import ReasonKind
from eligibility.models.domain.result import Reason
from eligibility.models.domain.scheme import Condition, Criterion
from eligibility.models.domain.subject import Subject
from eligibility.services.rule_engine.base import CriterionRule, resolve_strict_checking


class ProfileRule(CriterionRule):
    """
    Rule for criteria on the subject's own profile attributes.

    Example:
        subject:   {"income": 400000}
        criterion: {"kind": "profile",
                    "condition": {"name": "income", "operator": "lte",
                                  "values": 270000}}
        -> one condition_not_met reason
           "Does not meet criteria: lte (Required: <= 270000, Got: 400000)"

        subject:   {}  (income missing)
        -> strict:  one missing_field reason
        -> lenient: no reasons, criterion counts as passed
    """

    kind = ReasonKind.PROFILE

    def extract_value(self, subject: Subject, condition: Condition) -> Any:
        if not condition.name:
            return None
        return subject.get(condition.name)

    def execute(
        self,
        subject: Subject,
        criterion: Criterion,
        strict_checking: Optional[bool],
    ) -> List[Reason]:
        condition = criterion.condition
        strict = resolve_strict_checking(strict_checking, condition.strict_checking)
        value = self.extract_value(subject, condition)
        return self._check_condition(
            criterion,
            value,
            strict,
            missing_message=f"Missing required profile field: {condition.name}",
        )
