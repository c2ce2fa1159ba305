"""Document attribute rule."""

import logging
from typing import List, Optional

from eligibility.core.enums import ReasonCode, ReasonKind
from eligibility.core.exceptions import MalformedConditionError
from eligibility.models.domain.result import Reason
from eligibility.models.domain.scheme import Condition, Criterion
from eligibility.models.domain.subject import DocumentRecord, Subject
from eligibility.services.rule_engine.base import CriterionRule, resolve_strict_checking
from eligibility.services.rule_engine.verification import (
    DocumentVerifier,
    FlagDocumentVerifier,
)

logger = logging.getLogger(__name__)


class DocumentRule(CriterionRule):
    """
    Rule for criteria on documents attached to the subject.

    A criterion without a document key is malformed and raises
    MalformedConditionError, which the engine reports on that criterion.

    Checks run in order and stop at the first failure:
    1. Document presence (missing blocks only in strict mode)
    2. Allowed proof types (always enforced when allowed_proofs is set)
    3. Verification via the injected DocumentVerifier (strict mode only)
    4. The condition against document[condition.name], if an operator is set

    Example:
        documents: {"aadhaar": {"type": "driving_license", "verified": true}}
        criterion: {"kind": "document", "allowedProofs": ["aadhaar", "pan"],
                    "condition": {"documentKey": "aadhaar", ...}}
        -> one document_not_allowed reason, strict or not
    """

    kind = ReasonKind.DOCUMENT

    def __init__(self, verifier: Optional[DocumentVerifier] = None):
        """
        Initialize the rule.

        Args:
            verifier: Verification backend; defaults to trusting the
                document's own verified flag
        """
        self.verifier = verifier or FlagDocumentVerifier()

    def extract_value(self, subject: Subject, condition: Condition) -> Optional[DocumentRecord]:
        return subject.get_document(condition.document_key)

    def execute(
        self,
        subject: Subject,
        criterion: Criterion,
        strict_checking: Optional[bool],
    ) -> List[Reason]:
        condition = criterion.condition
        strict = resolve_strict_checking(strict_checking, condition.strict_checking)
        document_key = condition.document_key
        if not document_key:
            raise MalformedConditionError(
                "Document criterion requires a documentKey",
                details={"criterion": criterion.key},
            )
        document = self.extract_value(subject, condition)

        if document is None:
            if strict:
                return [
                    self._reason(
                        criterion,
                        ReasonCode.MISSING_DOCUMENT,
                        document_key,
                        f"Missing required document: {document_key}",
                    )
                ]
            return []

        if criterion.allowed_proofs and document.type not in criterion.allowed_proofs:
            return [
                self._reason(
                    criterion,
                    ReasonCode.DOCUMENT_NOT_ALLOWED,
                    document_key,
                    f"Document type '{document.type}' not allowed",
                    user_value=document.type,
                    required_value=list(criterion.allowed_proofs),
                    operator="allowedProofs",
                )
            ]

        if strict:
            try:
                verified = self.verifier.is_verified(document)
            except Exception as e:
                logger.warning(
                    f"Document verification failed for '{document_key}' "
                    f"(criterion {criterion.key}): {e}"
                )
                return [
                    self._reason(
                        criterion,
                        ReasonCode.DOCUMENT_ERROR,
                        document_key,
                        f"Error processing document: {e}",
                    )
                ]
            if not verified:
                return [
                    self._reason(
                        criterion,
                        ReasonCode.DOCUMENT_UNVERIFIED,
                        document_key,
                        "Invalid or unverified document",
                    )
                ]

        # Presence/proof-only criteria carry no operator
        if not condition.operator or not condition.name:
            return []

        return self._check_condition(
            criterion,
            document.get(condition.name),
            strict,
            missing_message=f"Missing required field '{condition.name}' in document: {document_key}",
        )
