"""Eligibility service for batch evaluation of subjects and schemes."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, TypeVar

from eligibility.core.enums import ItemStatus
from eligibility.core.exceptions import ItemEvaluationError
from eligibility.models.domain.result import EvaluationResult
from eligibility.models.domain.scheme import Scheme
from eligibility.models.domain.subject import Subject
from eligibility.services.rule_engine.engine import RuleEngine

logger = logging.getLogger(__name__)

T = TypeVar("T")

UNKNOWN_ID = "Unknown"


@dataclass
class ItemOutcome:
    """
    Terminal state of one batch item.

    Attributes:
        status: Eligible, ineligible or errored
        result: Evaluation result (None when errored)
        error: Error raised while evaluating (None unless errored)
    """

    status: ItemStatus
    result: Optional[EvaluationResult] = None
    error: Optional[ItemEvaluationError] = None


@dataclass
class SchemeOutcome:
    """Evaluation of one scheme for a subject."""

    scheme_id: Optional[str]
    details: EvaluationResult


@dataclass
class SchemeError:
    """A scheme whose evaluation failed unexpectedly."""

    scheme_id: str
    error: str
    code: str = ItemEvaluationError.code


@dataclass
class SchemeBatchResult:
    """Result of checking one subject against many schemes."""

    eligible: List[SchemeOutcome] = field(default_factory=list)
    ineligible: List[SchemeOutcome] = field(default_factory=list)
    errors: List[SchemeError] = field(default_factory=list)


@dataclass
class SubjectOutcome:
    """Evaluation of one subject against a scheme."""

    application_id: Optional[str]
    name: Optional[str]
    details: EvaluationResult


@dataclass
class SubjectError:
    """A subject whose evaluation failed unexpectedly."""

    application_id: str
    error: str
    code: str = ItemEvaluationError.code


@dataclass
class SubjectBatchResult:
    """Result of checking many subjects against one scheme."""

    eligible_subjects: List[SubjectOutcome] = field(default_factory=list)
    ineligible_subjects: List[SubjectOutcome] = field(default_factory=list)
    errors: List[SubjectError] = field(default_factory=list)


class EligibilityService:
    """
    Batch driver for eligibility evaluation.

    This service:
    - Runs the rule engine once per batch item
    - Sorts items into eligible, ineligible and errored buckets
    - Isolates unexpected failures to the item that raised them
    - Optionally evaluates items on a bounded worker pool

    Bucket contents keep the input order regardless of worker count.
    """

    def __init__(self, engine: Optional[RuleEngine] = None, max_workers: int = 1):
        """
        Initialize the eligibility service.

        Args:
            engine: Rule engine used for every item
            max_workers: Worker pool size; 1 evaluates sequentially
        """
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.engine = engine or RuleEngine()
        self.max_workers = max_workers

    def check_subject_against_schemes(
        self,
        subject: Subject,
        schemes: Sequence[Scheme],
        strict_checking: Optional[bool] = None,
    ) -> SchemeBatchResult:
        """
        Check one subject against many schemes.

        Args:
            subject: Subject to evaluate
            schemes: Schemes to evaluate against
            strict_checking: Per-request strictness; None defers to each criterion

        Returns:
            SchemeBatchResult with eligible, ineligible and errored schemes
        """
        logger.info(f"Checking subject against {len(schemes)} schemes")

        outcomes = self._run_batch(
            schemes,
            lambda scheme: self.engine.evaluate_scheme(subject, scheme, strict_checking),
            describe=lambda scheme: f"scheme {scheme.id or UNKNOWN_ID}",
        )

        results = SchemeBatchResult()
        for scheme, outcome in zip(schemes, outcomes):
            if outcome.status == ItemStatus.ERRORED:
                results.errors.append(
                    SchemeError(scheme_id=scheme.id or UNKNOWN_ID, error=outcome.error.message)
                )
                continue
            entry = SchemeOutcome(scheme_id=scheme.id, details=outcome.result)
            if outcome.status == ItemStatus.ELIGIBLE:
                results.eligible.append(entry)
            else:
                results.ineligible.append(entry)

        logger.info(
            f"Scheme batch completed: {len(results.eligible)} eligible, "
            f"{len(results.ineligible)} ineligible, {len(results.errors)} errors"
        )
        return results

    def check_subjects_against_scheme(
        self,
        subjects: Sequence[Subject],
        scheme: Scheme,
        strict_checking: Optional[bool] = None,
    ) -> SubjectBatchResult:
        """
        Check many subjects against one scheme.

        Args:
            subjects: Subjects to evaluate
            scheme: Scheme to evaluate against
            strict_checking: Per-request strictness; None defers to each criterion

        Returns:
            SubjectBatchResult with eligible, ineligible and errored subjects
        """
        logger.info(
            f"Checking {len(subjects)} subjects against scheme {scheme.id or UNKNOWN_ID}"
        )

        outcomes = self._run_batch(
            subjects,
            lambda subject: self.engine.evaluate_scheme(subject, scheme, strict_checking),
            describe=lambda subject: f"subject {subject.application_id or UNKNOWN_ID}",
        )

        results = SubjectBatchResult()
        for subject, outcome in zip(subjects, outcomes):
            if outcome.status == ItemStatus.ERRORED:
                results.errors.append(
                    SubjectError(
                        application_id=subject.application_id or UNKNOWN_ID,
                        error=outcome.error.message,
                    )
                )
                continue
            entry = SubjectOutcome(
                application_id=subject.application_id,
                name=subject.name,
                details=outcome.result,
            )
            if outcome.status == ItemStatus.ELIGIBLE:
                results.eligible_subjects.append(entry)
            else:
                results.ineligible_subjects.append(entry)

        logger.info(
            f"Subject batch completed: {len(results.eligible_subjects)} eligible, "
            f"{len(results.ineligible_subjects)} ineligible, {len(results.errors)} errors"
        )
        return results

    def _run_batch(
        self,
        items: Sequence[T],
        evaluate: Callable[[T], EvaluationResult],
        describe: Callable[[T], str],
    ) -> List[ItemOutcome]:
        """Evaluate every item, in input order, sequentially or on the pool."""

        def run(item: T) -> ItemOutcome:
            return self._evaluate_item(item, evaluate, describe)

        if self.max_workers == 1 or len(items) <= 1:
            return [run(item) for item in items]

        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(items))) as pool:
            return list(pool.map(run, items))

    @staticmethod
    def _evaluate_item(
        item: T,
        evaluate: Callable[[T], EvaluationResult],
        describe: Callable[[T], str],
    ) -> ItemOutcome:
        """Evaluate one item; unexpected exceptions become an errored outcome."""
        try:
            result = evaluate(item)
        except Exception as e:
            logger.error(f"Eligibility evaluation failed for {describe(item)}: {e}", exc_info=True)
            return ItemOutcome(
                status=ItemStatus.ERRORED,
                error=ItemEvaluationError(str(e), details={"type": type(e).__name__}),
            )

        status = ItemStatus.ELIGIBLE if result.is_eligible else ItemStatus.INELIGIBLE
        return ItemOutcome(status=status, result=result)
