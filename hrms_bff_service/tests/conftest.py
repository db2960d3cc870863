"""Shared fixtures for HRMS BFF Service tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path
from uuid import UUID, uuid4

import pytest
from dishka import make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from hrms_bff_service.config import HRMSBFFSettings
from hrms_bff_service.middleware import CorrelationIDMiddleware
from hrms_bff_service.tests.test_provider import (
    InfrastructureTestProvider,
    RequestContextTestProvider,
    make_test_settings,
)
from hrms_service_libs.error_handling.fastapi import register_error_handlers


@pytest.fixture
def correlation_id() -> UUID:
    return uuid4()


@pytest.fixture
def test_settings(tmp_path: Path) -> HRMSBFFSettings:
    return make_test_settings(upload_dir=tmp_path / "allowance")


def build_test_app(settings: HRMSBFFSettings) -> FastAPI:
    """App wired like production, minus CORS and the DI container."""
    app = FastAPI(title="hrms_bff_service_test")
    register_error_handlers(app, expose_error_details=settings.EXPOSE_ERROR_DETAILS)
    app.add_middleware(CorrelationIDMiddleware)

    from hrms_bff_service.api.health_routes import router as health_router
    from hrms_bff_service.api.v1 import router

    app.include_router(health_router)
    app.include_router(router, prefix="/api")
    return app


@pytest.fixture
async def client(test_settings: HRMSBFFSettings, correlation_id: UUID) -> AsyncIterator[AsyncClient]:
    """Create test client with Dishka container and test providers."""
    container = make_async_container(
        InfrastructureTestProvider(test_settings),
        RequestContextTestProvider(correlation_id),
        FastapiProvider(),
    )
    app = build_test_app(test_settings)
    setup_dishka(container, app)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    await container.close()
