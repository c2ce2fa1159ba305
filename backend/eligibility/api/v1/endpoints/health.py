"""Health check endpoint."""

from fastapi import APIRouter

from eligibility.models.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse, summary="Health check endpoint")
async def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Returns:
        HealthResponse: {"status": "ok"} while the service is running
    """
    return HealthResponse(status="ok")
