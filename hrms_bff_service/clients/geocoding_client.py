"""Google Geocoding API client."""

from __future__ import annotations

from typing import Any
from uuid import UUID

import httpx

from hrms_bff_service.clients._utils import decode_json_object
from hrms_service_libs.logging_utils import create_service_logger

logger = create_service_logger("hrms_bff.geocoding_client")


class GoogleGeocodingClient:
    """HTTP client for Google's reverse-geocoding endpoint."""

    def __init__(self, http_client: httpx.AsyncClient, geocode_url: str) -> None:
        self._client = http_client
        self._geocode_url = geocode_url

    async def reverse_geocode(
        self,
        latitude: str,
        longitude: str,
        api_key: str,
        correlation_id: UUID,
    ) -> dict[str, Any]:
        """Fetch the provider's reply for `latitude,longitude`.

        Raises:
            httpx.HTTPError: On HTTP errors from the provider
        """
        response = await self._client.get(
            self._geocode_url,
            params={"latlng": f"{latitude},{longitude}", "key": api_key},
        )
        response.raise_for_status()
        data = decode_json_object(response)

        logger.info(
            "Reverse geocode completed",
            provider_status=data.get("status"),
            result_count=len(data.get("results") or []),
            correlation_id=str(correlation_id),
        )
        return data
