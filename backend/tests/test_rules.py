"""Unit tests for profile and document criterion rules."""

import pytest

from eligibility.core.enums import ReasonCode, ReasonKind
from eligibility.core.exceptions import MalformedConditionError
from eligibility.models.domain import DocumentRecord, Subject
from eligibility.services.rule_engine import FlagDocumentVerifier, resolve_strict_checking
from eligibility.services.rule_engine.evaluators import DocumentRule, ProfileRule

from factories import document_criterion, profile_criterion


class TestResolveStrictChecking:
    """Test cases for strictness resolution."""

    def test_request_flag_wins(self):
        assert resolve_strict_checking(True, False) is True
        assert resolve_strict_checking(False, True) is False

    def test_criterion_default_applies(self):
        assert resolve_strict_checking(None, True) is True
        assert resolve_strict_checking(None, None) is False


class TestProfileRule:
    """Test cases for ProfileRule."""

    @pytest.fixture
    def rule(self):
        return ProfileRule()

    def test_passing_condition(self, rule):
        subject = Subject.from_dict({"income": 200000})
        criterion = profile_criterion("C1", "income", "lte", 270000)

        assert rule.execute(subject, criterion, None) == []

    def test_failing_condition(self, rule):
        subject = Subject.from_dict({"income": 400000})
        criterion = profile_criterion("C1", "income", "lte", 270000, description="Income cap")

        reasons = rule.execute(subject, criterion, None)

        assert len(reasons) == 1
        reason = reasons[0]
        assert reason.kind == ReasonKind.PROFILE
        assert reason.code == ReasonCode.CONDITION_NOT_MET
        assert reason.field == "income"
        assert reason.user_value == 400000
        assert reason.required_value == 270000
        assert reason.operator == "lte"
        assert reason.description == "Income cap"
        assert reason.criterion_key == "C1"
        assert reason.message == "Does not meet criteria: lte (Required: <= 270000, Got: 400000)"

    def test_missing_field_strict(self, rule):
        criterion = profile_criterion("C1", "income", "lte", 270000)

        reasons = rule.execute(Subject(), criterion, True)

        assert len(reasons) == 1
        assert reasons[0].code == ReasonCode.MISSING_FIELD
        assert reasons[0].message == "Missing required profile field: income"

    def test_missing_field_lenient(self, rule):
        criterion = profile_criterion("C1", "income", "lte", 270000)

        assert rule.execute(Subject(), criterion, False) == []

    def test_missing_field_uses_criterion_default(self, rule):
        criterion = profile_criterion("C1", "income", "lte", 270000, strict_checking=True)

        assert len(rule.execute(Subject(), criterion, None)) == 1
        assert rule.execute(Subject(), criterion, False) == []

    def test_zero_is_present(self, rule):
        subject = Subject.from_dict({"income": 0})
        criterion = profile_criterion("C1", "income", "gte", 1)

        reasons = rule.execute(subject, criterion, False)

        assert len(reasons) == 1
        assert reasons[0].code == ReasonCode.CONDITION_NOT_MET


class TestDocumentRule:
    """Test cases for DocumentRule."""

    @pytest.fixture
    def rule(self):
        return DocumentRule()

    @pytest.fixture
    def subject(self):
        return Subject.from_dict(
            {
                "documents": {
                    "aadhaar": {"type": "aadhaar", "verified": True, "vc": {"state": "KA"}},
                    "income_certificate": {"type": "income_certificate", "verified": False},
                    "caste_certificate": "",
                }
            }
        )

    def test_missing_document_strict(self, rule, subject):
        criterion = document_criterion("D1", "passport")

        reasons = rule.execute(subject, criterion, True)

        assert [r.code for r in reasons] == [ReasonCode.MISSING_DOCUMENT]
        assert reasons[0].kind == ReasonKind.DOCUMENT
        assert reasons[0].field == "passport"

    def test_empty_document_is_missing(self, rule, subject):
        criterion = document_criterion("D1", "caste_certificate")

        assert [r.code for r in rule.execute(subject, criterion, True)] == [ReasonCode.MISSING_DOCUMENT]
        assert rule.execute(subject, criterion, False) == []

    def test_allowed_proofs_enforced_when_lenient(self, rule, subject):
        criterion = document_criterion("D1", "aadhaar", allowed_proofs=["pan", "passport"])

        reasons = rule.execute(subject, criterion, False)

        assert [r.code for r in reasons] == [ReasonCode.DOCUMENT_NOT_ALLOWED]
        assert reasons[0].user_value == "aadhaar"
        assert reasons[0].required_value == ["pan", "passport"]

    def test_unverified_document_strict(self, rule, subject):
        criterion = document_criterion("D1", "income_certificate")

        assert [r.code for r in rule.execute(subject, criterion, True)] == [ReasonCode.DOCUMENT_UNVERIFIED]
        assert rule.execute(subject, criterion, False) == []

    def test_condition_on_document_field(self, rule, subject):
        passing = document_criterion("D1", "aadhaar", name="state", operator="equals", values="KA")
        failing = document_criterion("D2", "aadhaar", name="state", operator="in", values=["TN", "KL"])

        assert rule.execute(subject, passing, True) == []
        reasons = rule.execute(subject, failing, True)
        assert [r.code for r in reasons] == [ReasonCode.CONDITION_NOT_MET]
        assert reasons[0].user_value == "KA"

    def test_missing_document_field(self, rule, subject):
        criterion = document_criterion("D1", "aadhaar", name="expiry", operator="gte", values=2025)

        assert [r.code for r in rule.execute(subject, criterion, True)] == [ReasonCode.MISSING_FIELD]
        assert rule.execute(subject, criterion, False) == []

    def test_missing_document_key_is_malformed(self, rule, subject):
        criterion = document_criterion("D1", None, name="state", operator="equals", values="KA")

        with pytest.raises(MalformedConditionError):
            rule.execute(subject, criterion, False)

    def test_verifier_failure_becomes_reason(self, subject):
        class BrokenVerifier:
            def is_verified(self, document):
                raise RuntimeError("registry unavailable")

        rule = DocumentRule(verifier=BrokenVerifier())
        criterion = document_criterion("D1", "aadhaar")

        reasons = rule.execute(subject, criterion, True)

        assert [r.code for r in reasons] == [ReasonCode.DOCUMENT_ERROR]
        assert "registry unavailable" in reasons[0].message

    def test_injected_verifier_is_used(self, subject):
        class RejectAll:
            def is_verified(self, document):
                return False

        rule = DocumentRule(verifier=RejectAll())
        criterion = document_criterion("D1", "aadhaar")

        assert [r.code for r in rule.execute(subject, criterion, True)] == [ReasonCode.DOCUMENT_UNVERIFIED]


class TestFlagDocumentVerifier:
    """Test cases for the default verifier."""

    def test_only_true_counts(self):
        verifier = FlagDocumentVerifier()

        assert verifier.is_verified(DocumentRecord(verified=True)) is True
        assert verifier.is_verified(DocumentRecord(verified=None)) is False
        assert verifier.is_verified(DocumentRecord(verified="true")) is False
