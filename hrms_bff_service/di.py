"""Dependency Injection providers for HRMS BFF Service.

Provides Dishka DI container setup with APP-scoped infrastructure
and REQUEST-scoped context providers.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from uuid import UUID, uuid4

import httpx
from dishka import Provider, Scope, from_context, provide
from fastapi import Request

from hrms_bff_service.clients.geocoding_client import GoogleGeocodingClient
from hrms_bff_service.clients.upstream_gateway import UpstreamGatewayImpl
from hrms_bff_service.config import HRMSBFFSettings, UpstreamConfig, settings
from hrms_bff_service.protocols import GeocodingClientProtocol, UpstreamGatewayProtocol
from hrms_bff_service.uploads import AllowanceAttachmentStore


class HRMSBFFProvider(Provider):
    """Infrastructure provider for HRMS BFF Service.

    Provides APP-scoped dependencies: config, HTTP client, upstream clients.
    """

    scope = Scope.APP

    @provide
    def get_config(self) -> HRMSBFFSettings:
        """Provide settings singleton."""
        return settings

    @provide
    def get_upstream_config(self, config: HRMSBFFSettings) -> UpstreamConfig:
        """Snapshot upstream settings once for the gateway."""
        return config.upstream_config()

    @provide(scope=Scope.APP)
    async def get_http_client(self, config: HRMSBFFSettings) -> AsyncIterator[httpx.AsyncClient]:
        """Provide shared HTTP client with connection pooling."""
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(
                config.HTTP_CLIENT_TIMEOUT_SECONDS,
                connect=config.HTTP_CLIENT_CONNECT_TIMEOUT_SECONDS,
            )
        ) as client:
            yield client

    @provide(scope=Scope.APP)
    def provide_upstream_gateway(
        self, http_client: httpx.AsyncClient, upstream_config: UpstreamConfig
    ) -> UpstreamGatewayProtocol:
        """Provide upstream gateway singleton."""
        return UpstreamGatewayImpl(http_client, upstream_config)

    @provide(scope=Scope.APP)
    def provide_geocoding_client(
        self, http_client: httpx.AsyncClient, config: HRMSBFFSettings
    ) -> GeocodingClientProtocol:
        """Provide geocoding client singleton."""
        return GoogleGeocodingClient(http_client, config.GEOCODE_URL)

    @provide(scope=Scope.APP)
    def provide_attachment_store(self, config: HRMSBFFSettings) -> AllowanceAttachmentStore:
        """Provide allowance attachment store singleton."""
        return AllowanceAttachmentStore(
            upload_dir=config.ALLOWANCE_UPLOAD_DIR,
            upstream_root=config.ALLOWANCE_UPSTREAM_ROOT,
            max_file_bytes=config.ALLOWANCE_MAX_FILE_BYTES,
        )


class RequestContextProvider(Provider):
    """Request-scoped provider for correlation context.

    Reads the correlation_id from request state (set by CorrelationIDMiddleware).
    """

    request = from_context(provides=Request, scope=Scope.REQUEST)

    @provide(scope=Scope.REQUEST)
    def provide_correlation_id(self, request: Request) -> UUID:
        """Provide correlation ID from request state."""
        return getattr(request.state, "correlation_id", uuid4())
