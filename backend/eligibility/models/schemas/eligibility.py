"""Pydantic schemas for eligibility check requests and responses."""

from typing import Annotated, Any, Optional, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StrictBool,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from eligibility.core.enums import CriterionKind
from eligibility.models.domain.result import (
    CriterionResult,
    EvaluationResult,
    Reason,
)
from eligibility.models.domain.scheme import Condition, Criterion, Scheme
from eligibility.models.domain.subject import Subject
from eligibility.services.eligibility_service import (
    SchemeBatchResult,
    SchemeError,
    SchemeOutcome,
    SubjectBatchResult,
    SubjectError,
    SubjectOutcome,
)

Scalar = Union[StrictBool, int, float, str]
ConditionValues = Union[Scalar, list[Scalar]]


def _optional_str(value: Any) -> Any:
    """Accept numeric identifiers by rendering them as strings."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


IdStr = Annotated[Optional[str], BeforeValidator(_optional_str)]


# ==================== Request Schemas ====================


class ConditionIn(BaseModel):
    """
    Condition of a criterion.

    Accepts both the canonical names (operator, values, documentKey) and
    the legacy ones (condition, conditionValues, documentType).
    """

    name: str = Field(..., min_length=1, description="Profile attribute or document field")
    operator: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("operator", "condition"),
        description="Operator, e.g. equals, in, gte, lte, gt, lt, between",
    )
    values: Optional[ConditionValues] = Field(
        None,
        validation_alias=AliasChoices("values", "conditionValues"),
        description="Comparison value or list of values",
    )
    document_key: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("documentKey", "documentType", "document_key"),
    )
    strict_checking: Optional[bool] = Field(
        None,
        validation_alias=AliasChoices("strictChecking", "strict_checking"),
    )
    allowed_proofs: Optional[list[str]] = Field(
        None,
        validation_alias=AliasChoices("allowedProofs", "allowed_proofs"),
    )

    def to_domain(self) -> Condition:
        return Condition(
            name=self.name,
            operator=self.operator,
            values=self.values,
            document_key=self.document_key,
            strict_checking=self.strict_checking,
        )


class CriterionIn(BaseModel):
    """
    One eligibility criterion.

    Canonical form: {id, kind, description, condition, allowedProofs}.
    Legacy form:    {id, type: "userProfile"|"userDocument", description,
                     criteria: {name, condition, conditionValues, ...}}.
    """

    id: IdStr = None
    kind: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("kind", "type"),
        description="Criterion kind: profile or document",
    )
    description: str = ""
    condition: ConditionIn = Field(..., validation_alias=AliasChoices("condition", "criteria"))
    allowed_proofs: Optional[list[str]] = Field(
        None,
        validation_alias=AliasChoices("allowedProofs", "allowed_proofs"),
    )

    def to_domain(self) -> Criterion:
        """Normalize into the canonical Criterion; unknown kinds are kept as-is."""
        kind = CriterionKind.from_wire(self.kind)
        return Criterion(
            kind=kind.value if kind is not None else self.kind,
            condition=self.condition.to_domain(),
            id=self.id,
            description=self.description or "",
            allowed_proofs=self.allowed_proofs or self.condition.allowed_proofs,
        )


class SchemeIn(BaseModel):
    """A benefit scheme: criteria plus optional custom logic."""

    id: IdStr = None
    eligibility: list[CriterionIn] = Field(
        ...,
        validation_alias=AliasChoices("eligibility", "criteria"),
    )
    eligibility_evaluation_logic: Optional[str] = Field(
        None,
        validation_alias=AliasChoices(
            "eligibilityEvaluationLogic", "customLogic", "eligibility_evaluation_logic"
        ),
        description="Boolean expression over criterion ids, e.g. 'C1 && (C2 || C3)'",
    )

    @model_validator(mode="before")
    @classmethod
    def unwrap_localized(cls, data: Any) -> Any:
        """Accept schemes wrapped in a language block, e.g. {"en": {"eligibility": [...]}}."""
        if isinstance(data, dict) and "eligibility" not in data and "criteria" not in data:
            localized = data.get("en")
            if isinstance(localized, dict):
                return {**localized, **{k: v for k, v in data.items() if k != "en"}}
        return data

    def to_domain(self) -> Scheme:
        return Scheme(
            criteria=[criterion.to_domain() for criterion in self.eligibility],
            id=self.id,
            custom_logic=self.eligibility_evaluation_logic,
        )


class SubjectIn(BaseModel):
    """
    A subject profile. Any profile attribute may be present or absent.

    Documents map a document key to {type, verified, ...attributes}; an
    empty value counts as a missing document.
    """

    model_config = ConfigDict(extra="allow")

    application_id: IdStr = Field(
        None,
        validation_alias=AliasChoices("applicationId", "application_id"),
    )
    name: Optional[str] = None
    documents: Optional[dict[str, Any]] = None

    @field_validator("documents")
    @classmethod
    def check_documents(cls, value: Optional[dict[str, Any]]) -> Optional[dict[str, Any]]:
        if value is None:
            return value
        for key, document in value.items():
            if document in (None, ""):
                continue
            if not isinstance(document, dict):
                raise ValueError(f"Document '{key}' must be an object")
        return value

    def to_domain(self) -> Subject:
        data: dict[str, Any] = dict(self.model_extra or {})
        if self.name is not None:
            data["name"] = self.name
        if self.application_id is not None:
            data["applicationId"] = self.application_id
        if self.documents:
            data["documents"] = self.documents
        return Subject.from_dict(data)


class CheckEligibilityRequest(BaseModel):
    """One subject checked against many schemes."""

    user_profile: SubjectIn = Field(..., validation_alias=AliasChoices("userProfile", "user_profile"))
    benefits_list: list[SchemeIn] = Field(
        ...,
        validation_alias=AliasChoices("benefitsList", "benefits_list"),
    )


class CheckUsersEligibilityRequest(BaseModel):
    """Many subjects checked against one scheme."""

    user_profiles: list[SubjectIn] = Field(
        ...,
        validation_alias=AliasChoices("userProfiles", "user_profiles"),
    )
    benefit_schema: SchemeIn = Field(
        ...,
        validation_alias=AliasChoices("benefitSchema", "benefit_schema"),
    )


# ==================== Response Schemas ====================


class CamelModel(BaseModel):
    """Base for response schemas serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ReasonResponse(CamelModel):
    """Schema for one ineligibility reason."""

    kind: str
    code: str
    field: Optional[str] = None
    message: str
    description: str = ""
    user_value: Any = None
    required_value: Any = None
    operator: Optional[str] = None
    criterion_key: Optional[str] = None

    @classmethod
    def from_domain(cls, reason: Reason) -> "ReasonResponse":
        return cls(
            kind=reason.kind.value,
            code=reason.code.value,
            field=reason.field,
            message=reason.message,
            description=reason.description,
            user_value=reason.user_value,
            required_value=reason.required_value,
            operator=reason.operator,
            criterion_key=reason.criterion_key,
        )


class CriterionResultResponse(CamelModel):
    """Schema for the outcome of one criterion."""

    key: str
    passed: bool
    description: str = ""
    reasons: list[ReasonResponse] = []

    @classmethod
    def from_domain(cls, result: CriterionResult) -> "CriterionResultResponse":
        return cls(
            key=result.key,
            passed=result.passed,
            description=result.description,
            reasons=[ReasonResponse.from_domain(r) for r in result.reasons],
        )


class EvaluationResultResponse(CamelModel):
    """Schema for one subject-scheme evaluation."""

    is_eligible: bool
    reasons: Union[list[ReasonResponse], str]
    evaluation_results: dict[str, bool] = {}
    criteria_results: list[CriterionResultResponse] = []

    @classmethod
    def from_domain(cls, result: EvaluationResult) -> "EvaluationResultResponse":
        reasons: Union[list[ReasonResponse], str]
        if isinstance(result.reasons, str):
            reasons = result.reasons
        else:
            reasons = [ReasonResponse.from_domain(r) for r in result.reasons]
        return cls(
            is_eligible=result.is_eligible,
            reasons=reasons,
            evaluation_results=dict(result.evaluation_results),
            criteria_results=[CriterionResultResponse.from_domain(c) for c in result.criteria_results],
        )


class SchemeOutcomeResponse(CamelModel):
    """Schema for one scheme's outcome in a subject-vs-schemes check."""

    scheme_id: Optional[str] = Field(None, alias="schemaId")
    details: EvaluationResultResponse

    @classmethod
    def from_domain(cls, outcome: SchemeOutcome) -> "SchemeOutcomeResponse":
        return cls(
            scheme_id=outcome.scheme_id,
            details=EvaluationResultResponse.from_domain(outcome.details),
        )


class SchemeErrorResponse(CamelModel):
    """Schema for a scheme that failed to evaluate."""

    scheme_id: str = Field(..., alias="schemaId")
    error: str
    code: str

    @classmethod
    def from_domain(cls, error: SchemeError) -> "SchemeErrorResponse":
        return cls(scheme_id=error.scheme_id, error=error.error, code=error.code)


class CheckEligibilityResponse(CamelModel):
    """Response for one subject checked against many schemes."""

    eligible: list[SchemeOutcomeResponse] = []
    ineligible: list[SchemeOutcomeResponse] = []
    errors: list[SchemeErrorResponse] = []

    @classmethod
    def from_domain(cls, results: SchemeBatchResult) -> "CheckEligibilityResponse":
        return cls(
            eligible=[SchemeOutcomeResponse.from_domain(o) for o in results.eligible],
            ineligible=[SchemeOutcomeResponse.from_domain(o) for o in results.ineligible],
            errors=[SchemeErrorResponse.from_domain(e) for e in results.errors],
        )


class SubjectOutcomeResponse(CamelModel):
    """Schema for one subject's outcome in a subjects-vs-scheme check."""

    application_id: Optional[str] = None
    name: Optional[str] = None
    details: EvaluationResultResponse

    @classmethod
    def from_domain(cls, outcome: SubjectOutcome) -> "SubjectOutcomeResponse":
        return cls(
            application_id=outcome.application_id,
            name=outcome.name,
            details=EvaluationResultResponse.from_domain(outcome.details),
        )


class SubjectErrorResponse(CamelModel):
    """Schema for a subject that failed to evaluate."""

    application_id: str
    error: str
    code: str

    @classmethod
    def from_domain(cls, error: SubjectError) -> "SubjectErrorResponse":
        return cls(application_id=error.application_id, error=error.error, code=error.code)


class CheckUsersEligibilityResponse(CamelModel):
    """Response for many subjects checked against one scheme."""

    eligible_users: list[SubjectOutcomeResponse] = []
    ineligible_users: list[SubjectOutcomeResponse] = []
    errors: list[SubjectErrorResponse] = []

    @classmethod
    def from_domain(cls, results: SubjectBatchResult) -> "CheckUsersEligibilityResponse":
        return cls(
            eligible_users=[SubjectOutcomeResponse.from_domain(o) for o in results.eligible_subjects],
            ineligible_users=[SubjectOutcomeResponse.from_domain(o) for o in results.ineligible_subjects],
            errors=[SubjectErrorResponse.from_domain(e) for e in results.errors],
        )


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
