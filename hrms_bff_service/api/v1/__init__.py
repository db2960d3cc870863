"""HRMS BFF API v1 routes.

Combines the per-area routers; mounted under the `/api` prefix by the app.
"""

from fastapi import APIRouter

from hrms_bff_service.api.v1.attendance_routes import router as attendance_router
from hrms_bff_service.api.v1.auth_routes import router as auth_router
from hrms_bff_service.api.v1.employee_routes import router as employee_router
from hrms_bff_service.api.v1.holiday_routes import router as holiday_router
from hrms_bff_service.api.v1.leave_routes import router as leave_router
from hrms_bff_service.api.v1.payroll_routes import router as payroll_router

router = APIRouter()
router.include_router(auth_router, tags=["Auth"])
router.include_router(attendance_router, tags=["Attendance"])
router.include_router(leave_router, tags=["Leave"])
router.include_router(payroll_router, tags=["Payroll"])
router.include_router(holiday_router, tags=["Holiday"])
router.include_router(employee_router, tags=["Employee"])

__all__ = ["router"]
