"""HRMS BFF Service DTO module.

Contains the upstream record models and their camelCase client shapes.
"""

from hrms_bff_service.dto.records_v1 import UpstreamRecord, map_records

__all__ = ["UpstreamRecord", "map_records"]
