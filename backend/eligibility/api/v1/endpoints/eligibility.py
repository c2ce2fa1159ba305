"""Eligibility check endpoints."""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.concurrency import run_in_threadpool

from eligibility.deps import get_eligibility_service
from eligibility.models.schemas import (
    CheckEligibilityRequest,
    CheckEligibilityResponse,
    CheckUsersEligibilityRequest,
    CheckUsersEligibilityResponse,
)
from eligibility.services.eligibility_service import EligibilityService

logger = logging.getLogger(__name__)

router = APIRouter()

StrictChecking = Annotated[
    Optional[bool],
    Query(
        alias="strictChecking",
        description=(
            "Treat missing fields and documents as failures. "
            "Omit to use each criterion's own setting."
        ),
    ),
]


@router.post(
    "/check-eligibility",
    response_model=CheckEligibilityResponse,
    response_model_exclude_none=True,
    summary="Check eligibility for benefits",
    description="Checks if a user is eligible for each of the given benefit schemes",
)
async def check_eligibility(
    request: CheckEligibilityRequest,
    service: Annotated[EligibilityService, Depends(get_eligibility_service)],
    strict_checking: StrictChecking = None,
) -> CheckEligibilityResponse:
    """
    Check one user profile against many benefit schemes.

    Each scheme is evaluated independently; a scheme that fails to
    evaluate is reported in "errors" without affecting the others.
    """
    try:
        subject = request.user_profile.to_domain()
        schemes = [scheme.to_domain() for scheme in request.benefits_list]

        results = await run_in_threadpool(
            service.check_subject_against_schemes,
            subject,
            schemes,
            strict_checking,
        )
        return CheckEligibilityResponse.from_domain(results)

    except Exception as e:
        logger.error(f"Error checking eligibility: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to check eligibility",
        )


@router.post(
    "/check-users-eligibility",
    response_model=CheckUsersEligibilityResponse,
    response_model_exclude_none=True,
    summary="Check users eligibility for a scheme",
    description="Checks which of the given users are eligible for one benefit scheme",
)
async def check_users_eligibility(
    request: CheckUsersEligibilityRequest,
    service: Annotated[EligibilityService, Depends(get_eligibility_service)],
    strict_checking: StrictChecking = None,
) -> CheckUsersEligibilityResponse:
    """
    Check many user profiles against one benefit scheme.

    Each user is evaluated independently; a user that fails to evaluate
    is reported in "errors" without affecting the others.
    """
    try:
        subjects = [profile.to_domain() for profile in request.user_profiles]
        scheme = request.benefit_schema.to_domain()

        results = await run_in_threadpool(
            service.check_subjects_against_scheme,
            subjects,
            scheme,
            strict_checking,
        )
        return CheckUsersEligibilityResponse.from_domain(results)

    except Exception as e:
        logger.error(f"Error checking users eligibility: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to check users eligibility",
        )
