"""FastAPI application entry point."""

import logging
from http import HTTPStatus
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from eligibility.api.v1.router import api_router
from eligibility.config import Settings, settings
from eligibility.core.exceptions import StructuralError
from eligibility.core.logging import configure_logging
from eligibility.deps import build_eligibility_service
from eligibility.services.rule_engine import DocumentVerifier

logger = logging.getLogger(__name__)


def create_app(
    config: Settings = settings,
    verifier: Optional[DocumentVerifier] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Application settings
        verifier: Optional document verification backend

    Returns:
        Configured FastAPI application
    """
    configure_logging(config.LOG_LEVEL)

    app = FastAPI(
        title=config.APP_NAME,
        description="API for evaluating user profiles against benefit scheme eligibility criteria",
        version=config.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Configure CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.eligibility_service = build_eligibility_service(config, verifier)

    app.include_router(api_router, prefix=config.API_PREFIX)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning(f"Rejected request to {request.url.path}: {len(exc.errors())} validation error(s)")
        error = StructuralError(
            "Request body failed validation",
            details={"errors": jsonable_encoder(exc.errors())},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Bad Request", **error.to_dict()},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": HTTPStatus(exc.status_code).phrase,
                "message": exc.detail,
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error on {request.url.path}: {str(exc)}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal Server Error",
                "message": "An unexpected error occurred",
            },
        )

    @app.get("/")
    async def root() -> dict:
        """Root endpoint."""
        return {
            "message": config.APP_NAME,
            "version": config.APP_VERSION,
            "docs": "/docs",
        }

    logger.info(f"{config.APP_NAME} {config.APP_VERSION} initialized ({config.ENVIRONMENT})")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("eligibility.main:app", host="0.0.0.0", port=8000)
