"""Health routes for HRMS BFF Service."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter

from hrms_bff_service.config import settings

router = APIRouter()


@router.get("/health", tags=["Health"])
async def health_check() -> dict[str, str | int]:
    """Liveness check; does not contact the upstream HR service."""
    return {
        "service": settings.SERVICE_NAME,
        "status": "OK",
        "port": settings.PORT,
        "environment": settings.ENVIRONMENT.value,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
