"""Holiday routes: holiday calendar by branch or by employee."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Body, Query
from fastapi.responses import JSONResponse

from hrms_bff_service.api.v1._boundary import SERVICE_NAME, check_outcome, upstream_boundary
from hrms_bff_service.api.v1._validation import require_fields
from hrms_bff_service.dto.records_v1 import HolidayV1, map_records
from hrms_bff_service.envelope import ok
from hrms_bff_service.protocols import UpstreamGatewayProtocol
from hrms_bff_service.upstream.status import StatusConvention
from hrms_service_libs.error_handling import raise_not_implemented, raise_upstream_business_error
from hrms_service_libs.logging_utils import create_service_logger

router = APIRouter()
logger = create_service_logger("hrms_bff.holiday_routes")


def branch_of(employee: dict[str, Any]) -> str | None:
    """Branch code of a GetEmpDetail reply: top-level `ls_BPLID`, else the first record's."""
    branch = employee.get("ls_BPLID")
    if branch in (None, ""):
        for key, value in employee.items():
            if key.startswith("lst_") and isinstance(value, list) and value:
                first = value[0]
                branch = first.get("ls_BPLID") if isinstance(first, dict) else None
                break
    if branch in (None, ""):
        return None
    return str(branch)


async def _holiday_report(
    gateway: UpstreamGatewayProtocol,
    correlation_id: UUID,
    *,
    operation: str,
    branch_id: str,
    fin_year: str,
    describe: bool = False,
) -> list[dict[str, Any]]:
    default_message = "Failed to fetch holiday report"
    with upstream_boundary(operation, default_message, correlation_id, describe=describe):
        reply = await gateway.call(
            "GetHolidayRpt",
            correlation_id=correlation_id,
            params={"Branch": branch_id, "FinYear": fin_year},
        )

    check_outcome(
        reply,
        StatusConvention.NESTED_STATUS,
        operation=operation,
        default_message=default_message,
        correlation_id=correlation_id,
    )
    return map_records(HolidayV1, reply.get("lst_ClsHolidayRptDtls"))


@router.get("/holiday-report")
@inject
async def get_holiday_report(
    gateway: FromDishka[UpstreamGatewayProtocol],
    correlation_id: FromDishka[UUID],
    ls_BranchId: str | None = Query(None),
    ls_FinYear: str | None = Query(None),
) -> JSONResponse:
    """Holidays of a branch in a financial year, dates as `YYYY-MM-DD`."""
    require_fields(
        {"ls_BranchId": ls_BranchId, "ls_FinYear": ls_FinYear},
        ["ls_BranchId", "ls_FinYear"],
        operation="get_holiday_report",
        correlation_id=correlation_id,
        message="Branch ID and Financial Year are required.",
    )
    holidays = await _holiday_report(
        gateway,
        correlation_id,
        operation="get_holiday_report",
        branch_id=ls_BranchId,
        fin_year=ls_FinYear,
    )
    return ok(
        "Holiday report fetched successfully",
        holidayData=holidays,
        branchId=ls_BranchId,
        totalHolidays=len(holidays),
    )


@router.get("/holiday-report-emp")
@inject
async def get_employee_holiday_report(
    gateway: FromDishka[UpstreamGatewayProtocol],
    correlation_id: FromDishka[UUID],
    empCode: str | None = Query(None),
    finYear: str | None = Query(None),
) -> JSONResponse:
    """Holidays of the employee's branch.

    The branch is resolved with GetEmpDetail first; when that fails or yields
    no branch, GetHolidayRpt is never called.
    """
    require_fields(
        {"empCode": empCode, "finYear": finYear},
        ["empCode", "finYear"],
        operation="get_employee_holiday_report",
        correlation_id=correlation_id,
        message="Employee code and Financial Year are required.",
    )

    with upstream_boundary(
        "get_employee_holiday_report",
        "Failed to fetch employee details",
        correlation_id,
        describe=True,
    ):
        employee = await gateway.call(
            "GetEmpDetail", correlation_id=correlation_id, params={"EmpCode": empCode}
        )

    check_outcome(
        employee,
        StatusConvention.EITHER_STATUS,
        operation="get_employee_holiday_report",
        default_message="Employee not found",
        correlation_id=correlation_id,
    )
    branch_id = branch_of(employee)
    if branch_id is None:
        logger.warning("Employee has no branch", emp_code=empCode)
        raise_upstream_business_error(
            service=SERVICE_NAME,
            operation="get_employee_holiday_report",
            message="Branch not found for employee",
            correlation_id=correlation_id,
        )

    holidays = await _holiday_report(
        gateway,
        correlation_id,
        operation="get_employee_holiday_report",
        branch_id=branch_id,
        fin_year=finYear,
        describe=True,
    )
    return ok(
        "Holiday report fetched successfully",
        holidayData=holidays,
        branchId=branch_id,
        totalHolidays=len(holidays),
    )


@router.post("/create-holiday")
@inject
async def create_holiday(
    correlation_id: FromDishka[UUID],
    body: dict[str, Any] | None = Body(None),
) -> JSONResponse:
    """Holiday creation; no upstream operation accepts it yet."""
    require_fields(
        body or {},
        ["ls_EmpType", "ls_HldDate", "ls_Reason"],
        operation="create_holiday",
        correlation_id=correlation_id,
        message="Employee Type, Holiday Date, and Reason are required.",
    )
    raise_not_implemented(
        service=SERVICE_NAME,
        operation="create_holiday",
        message="Holiday creation is not available: no upstream integration",
        correlation_id=correlation_id,
    )
