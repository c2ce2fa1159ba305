"""Shared fixtures for eligibility engine tests."""

import pytest

from eligibility.models.domain import Scheme, Subject
from eligibility.services.rule_engine import RuleEngine

from factories import profile_criterion


@pytest.fixture
def engine():
    """Create RuleEngine instance."""
    return RuleEngine()


@pytest.fixture
def student():
    """Subject from the scholarship example."""
    return Subject.from_dict(
        {
            "applicationId": "app-1",
            "name": "Asha",
            "income": 200000,
            "class": "10",
            "caste": "sc",
            "documents": {
                "aadhaar": {"type": "aadhaar", "verified": True, "vc": {"state": "KA"}},
            },
        }
    )


@pytest.fixture
def scholarship():
    """Scheme requiring low income and a class between 9 and 12."""
    return Scheme(
        id="scholarship",
        criteria=[
            profile_criterion("C1", "income", "lte", 270000, description="Income at most 2.7L"),
            profile_criterion("C2", "class", "between", [9, 12], description="Class 9 to 12"),
        ],
    )
