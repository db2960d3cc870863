"""HTTP gateway to the upstream HR WCF service."""

from __future__ import annotations

import time
from typing import Any
from uuid import UUID

import httpx

from hrms_bff_service.clients._utils import decode_json_object
from hrms_bff_service.config import UpstreamConfig
from hrms_bff_service.protocols import UNSET, HttpMethod
from hrms_service_libs.logging_utils import create_service_logger

logger = create_service_logger("hrms_bff.upstream_gateway")


class UpstreamGatewayImpl:
    """Single best-effort call per invocation: no retries, no caching."""

    def __init__(self, http_client: httpx.AsyncClient, config: UpstreamConfig) -> None:
        """Initialize with shared HTTP client and immutable upstream config.

        Args:
            http_client: Shared httpx AsyncClient instance
            config: Base URL, headers and timeout table for the upstream service
        """
        self._client = http_client
        self._config = config

    async def call(
        self,
        endpoint: str,
        method: HttpMethod = "GET",
        *,
        correlation_id: UUID,
        params: dict[str, Any] | None = None,
        payload: dict[str, Any] | None = None,
        timeout: float | None = UNSET,
    ) -> dict[str, Any]:
        """Call an upstream operation and return its raw JSON object.

        Raises:
            httpx.HTTPStatusError: On non-2xx replies
            httpx.TransportError: On connection failures and timeouts
        """
        url = self._config.url_for(endpoint)
        effective_timeout = self._config.timeout_for(endpoint) if timeout is UNSET else timeout
        headers = {**self._config.headers, "X-Correlation-ID": str(correlation_id)}

        logger.debug(
            "Calling upstream",
            endpoint=endpoint,
            method=method,
            timeout=effective_timeout,
        )

        started = time.perf_counter()
        if method == "POST":
            response = await self._client.post(
                url, json=payload or {}, headers=headers, timeout=effective_timeout
            )
        else:
            response = await self._client.get(
                url, params=params, headers=headers, timeout=effective_timeout
            )
        elapsed_ms = round((time.perf_counter() - started) * 1000, 1)

        logger.info(
            "Upstream responded",
            endpoint=endpoint,
            method=method,
            status_code=response.status_code,
            elapsed_ms=elapsed_ms,
        )

        response.raise_for_status()
        return decode_json_object(response)

