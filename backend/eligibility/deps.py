"""Dependency injection for FastAPI endpoints."""

from typing import Optional

from fastapi import Request

from eligibility.config import Settings
from eligibility.services.eligibility_service import EligibilityService
from eligibility.services.rule_engine import (
    CustomLogicEvaluator,
    DocumentVerifier,
    FlagDocumentVerifier,
    RuleEngine,
)


def build_eligibility_service(
    config: Settings,
    verifier: Optional[DocumentVerifier] = None,
) -> EligibilityService:
    """
    Construct the eligibility service and its engine.

    Called once by the application factory; the result is stateless and
    shared across requests.

    Args:
        config: Application settings
        verifier: Document verification backend; defaults to the
            verified-flag check

    Returns:
        Configured EligibilityService
    """
    engine = RuleEngine(
        custom_logic_evaluator=CustomLogicEvaluator(),
        verifier=verifier or FlagDocumentVerifier(),
    )
    return EligibilityService(engine, max_workers=config.BATCH_MAX_WORKERS)


def get_eligibility_service(request: Request) -> EligibilityService:
    """Get the eligibility service attached to the running application."""
    return request.app.state.eligibility_service
