"""HRMS BFF Service clients module.

Contains HTTP clients for the upstream HR service and the geocoding provider.
"""

from hrms_bff_service.clients.geocoding_client import GoogleGeocodingClient
from hrms_bff_service.clients.upstream_gateway import UpstreamGatewayImpl

__all__ = ["UpstreamGatewayImpl", "GoogleGeocodingClient"]
