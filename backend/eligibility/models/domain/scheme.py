"""Scheme, criterion and condition domain models."""

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class Condition:
    """
    The comparison a criterion applies to one subject value.

    Attributes:
        name: Attribute (profile) or document field to read
        operator: Operator name as authored; normalized by the evaluator
        values: One scalar or an ordered list of scalars
        document_key: Document to read from (document criteria only)
        strict_checking: Per-criterion strictness default
    """

    name: Optional[str]
    operator: Optional[str]
    values: Any = None
    document_key: Optional[str] = None
    strict_checking: Optional[bool] = None


@dataclass
class Criterion:
    """
    One named eligibility check.

    Attributes:
        kind: Rule variant tag ("profile" or "document"; unknown tags kept as-is)
        condition: The condition to evaluate
        id: Stable identifier referenced by custom logic expressions
        description: Human-readable description of the requirement
        allowed_proofs: Accepted document types (document criteria only)
    """

    kind: str
    condition: Condition
    id: Optional[str] = None
    description: str = ""
    allowed_proofs: Optional[List[str]] = None

    @property
    def key(self) -> str:
        """
        Key under which this criterion's outcome is recorded.

        Falls back to the condition name when no id is given; such keys
        are not stable across scheme revisions.
        """
        if self.id:
            return self.id
        return self.condition.name or ""


@dataclass
class Scheme:
    """
    A benefit scheme: ordered criteria plus optional custom logic.

    Attributes:
        criteria: Ordered criteria
        id: Scheme identifier used to label batch results
        custom_logic: Boolean expression over criterion keys
    """

    criteria: List[Criterion] = field(default_factory=list)
    id: Optional[str] = None
    custom_logic: Optional[str] = None
