"""Error handling utilities for HRMS services."""

from hrms_service_libs.error_handling.error_detail import ErrorDetail
from hrms_service_libs.error_handling.factories import (
    create_error_detail,
    raise_authentication_error,
    raise_configuration_error,
    raise_missing_required_field,
    raise_not_implemented,
    raise_processing_error,
    raise_resource_not_found,
    raise_upstream_business_error,
    raise_upstream_transport_error,
    raise_validation_error,
)
from hrms_service_libs.error_handling.hrms_error import HrmsError

__all__ = [
    "ErrorDetail",
    "HrmsError",
    "create_error_detail",
    "raise_authentication_error",
    "raise_configuration_error",
    "raise_missing_required_field",
    "raise_not_implemented",
    "raise_processing_error",
    "raise_resource_not_found",
    "raise_upstream_business_error",
    "raise_upstream_transport_error",
    "raise_validation_error",
]
