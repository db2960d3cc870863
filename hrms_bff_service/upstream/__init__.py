"""Interpretation of upstream replies: status conventions and error normalization."""

from hrms_bff_service.upstream.errors import describe_transport_error, normalize_upstream_error
from hrms_bff_service.upstream.status import StatusConvention, UpstreamOutcome, interpret

__all__ = [
    "StatusConvention",
    "UpstreamOutcome",
    "describe_transport_error",
    "interpret",
    "normalize_upstream_error",
]
