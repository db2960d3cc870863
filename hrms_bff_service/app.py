"""HRMS BFF Service - REST facade for the HRMS web client.

Exposes JSON endpoints under `/api` that proxy the legacy HR WCF service,
renaming its Hungarian-notation fields and translating its status flags
into HTTP status codes.
"""

from __future__ import annotations

from dishka import make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hrms_bff_service.api.health_routes import router as health_router
from hrms_bff_service.api.v1 import router as hrms_router_v1
from hrms_bff_service.config import settings
from hrms_bff_service.di import HRMSBFFProvider, RequestContextProvider
from hrms_bff_service.middleware import CorrelationIDMiddleware
from hrms_service_libs.error_handling.fastapi import register_error_handlers
from hrms_service_libs.logging_utils import configure_service_logging, create_service_logger

logger = create_service_logger("hrms_bff_service")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    configure_service_logging(
        settings.SERVICE_NAME,
        environment=settings.ENVIRONMENT.value,
        log_level=settings.LOG_LEVEL,
    )

    app = FastAPI(
        title=settings.SERVICE_NAME,
        version="0.1.0",
        description="HRMS BFF Service - REST facade over the HR WCF service",
        docs_url="/docs" if settings.is_development() else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.is_development() else None,
    )

    # Register error handlers
    register_error_handlers(app, expose_error_details=settings.EXPOSE_ERROR_DETAILS)

    # Add Correlation ID Middleware
    app.add_middleware(CorrelationIDMiddleware)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

    # Health check at the root and under the API prefix
    app.include_router(health_router)
    app.include_router(health_router, prefix=settings.API_PREFIX)

    # Routes: /api/login, /api/attendance, etc.
    app.include_router(hrms_router_v1, prefix=settings.API_PREFIX)

    # Setup Dishka DI container
    container = make_async_container(
        HRMSBFFProvider(),
        RequestContextProvider(),
        FastapiProvider(),
    )
    setup_dishka(container, app)
    app.state.di_container = container

    logger.info(
        "HRMS BFF configured",
        upstream_base_url=settings.UPSTREAM_BASE_URL,
        api_prefix=settings.API_PREFIX,
    )
    return app


# Create application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "hrms_bff_service.app:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development(),
        log_level=settings.LOG_LEVEL.lower(),
    )
