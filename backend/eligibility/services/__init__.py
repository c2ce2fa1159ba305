"""Service layer for eligibility evaluation."""

from eligibility.services.eligibility_service import EligibilityService

__all__ = ["EligibilityService"]
