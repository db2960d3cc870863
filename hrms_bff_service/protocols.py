"""Protocol definitions for HRMS BFF Service.

Defines interfaces for the upstream clients used in dependency injection.
"""

from __future__ import annotations

from typing import Any, Literal, Protocol
from uuid import UUID

HttpMethod = Literal["GET", "POST"]


class _Unset:
    """Sentinel type: no per-call timeout given, use the configured one."""

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


class UpstreamGatewayProtocol(Protocol):
    """Protocol for the upstream HR WCF service gateway."""

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
        """Send one request to `endpoint` under the fixed base URL.

        Args:
            endpoint: Operation name appended to the base URL (e.g. "EmpLogin")
            method: GET (query parameters) or POST (JSON payload)
            correlation_id: Request correlation ID for tracing
            params: Query parameters for GET
            payload: JSON body for POST, keyed by upstream field names
            timeout: Per-call override; None disables the timeout

        Returns:
            The raw upstream JSON object ({} when the body is not an object)

        Raises:
            httpx.HTTPError: On connection failure, timeout or non-2xx status
        """
        ...


class GeocodingClientProtocol(Protocol):
    """Protocol for the reverse-geocoding provider."""

    async def reverse_geocode(
        self,
        latitude: str,
        longitude: str,
        api_key: str,
        correlation_id: UUID,
    ) -> dict[str, Any]:
        """Return the provider's raw reverse-geocode reply for a coordinate.

        Raises:
            httpx.HTTPError: On connection failure, timeout or non-2xx status
        """
        ...
