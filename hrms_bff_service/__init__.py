"""HRMS BFF Service: REST facade over the legacy HR WCF service."""

SERVICE_NAME = "hrms_bff_service"
