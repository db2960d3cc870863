"""Leave routes: types, applications, history and balances."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Body, Query
from fastapi.responses import JSONResponse

from hrms_bff_service.api.v1._boundary import check_outcome, upstream_boundary
from hrms_bff_service.api.v1._validation import require_fields
from hrms_bff_service.dto.records_v1 import (
    LeaveBalanceV1,
    LeaveHistoryRecordV1,
    LeaveTypeV1,
    PendingLeaveV1,
    map_records,
)
from hrms_bff_service.dto.requests_v1 import build_leave_application
from hrms_bff_service.envelope import ok
from hrms_bff_service.protocols import UpstreamGatewayProtocol
from hrms_bff_service.upstream.status import StatusConvention
from hrms_service_libs.logging_utils import create_service_logger

router = APIRouter()
logger = create_service_logger("hrms_bff.leave_routes")


@router.get("/leave-types")
@inject
async def get_leave_types(
    gateway: FromDishka[UpstreamGatewayProtocol],
    correlation_id: FromDishka[UUID],
    empType: str | None = Query(None),
    bplId: str | None = Query(None),
) -> JSONResponse:
    """Leave types available to an employee type at a branch.

    An upstream failure flag renders as 502: the request was valid but the
    upstream could not serve it.
    """
    require_fields(
        {"empType": empType},
        ["empType"],
        operation="get_leave_types",
        correlation_id=correlation_id,
        message="Employee type (empType) is required",
    )
    require_fields(
        {"bplId": bplId},
        ["bplId"],
        operation="get_leave_types",
        correlation_id=correlation_id,
        message="Branch ID (bplId) is required",
    )

    with upstream_boundary("get_leave_types", "Failed to fetch leave types", correlation_id):
        reply = await gateway.call(
            "GetLeaveTypes",
            correlation_id=correlation_id,
            params={"EmpType": empType, "BPLID": bplId},
        )

    check_outcome(
        reply,
        StatusConvention.NESTED_STATUS,
        operation="get_leave_types",
        default_message="Upstream service failed to provide leave types",
        correlation_id=correlation_id,
        status_code=502,
    )
    leave_types = map_records(LeaveTypeV1, reply.get("lst_ClsMstrLeavTypDtls"))
    logger.debug("Mapped leave types", count=len(leave_types))
    return ok("Leave types fetched successfully", leaveTypes=leave_types)


@router.post("/apply-leave")
@inject
async def apply_leave(
    gateway: FromDishka[UpstreamGatewayProtocol],
    correlation_id: FromDishka[UUID],
    body: dict[str, Any] | None = Body(None),
) -> JSONResponse:
    body = body or {}
    require_fields(
        body,
        ["ls_EmpCode", "ls_FromDate", "ls_ToDate", "ls_LeavTyp", "ls_GrpNo"],
        operation="apply_leave",
        correlation_id=correlation_id,
    )
    payload = build_leave_application(body)

    with upstream_boundary("apply_leave", "Leave application failed", correlation_id):
        reply = await gateway.call("LeavApply", "POST", correlation_id=correlation_id, payload=payload)

    outcome = check_outcome(
        reply,
        StatusConvention.TOP_LEVEL_STATUS,
        operation="apply_leave",
        default_message="Leave application failed",
        correlation_id=correlation_id,
        envelope={"data": reply},
    )
    return ok(outcome.message or "Leave applied successfully", data=reply)


@router.get("/leave-history")
@inject
async def get_leave_history(
    gateway: FromDishka[UpstreamGatewayProtocol],
    correlation_id: FromDishka[UUID],
    ls_EmpCode: str | None = Query(None),
    ls_DocDate: str | None = Query(None),
    ls_Check: str | None = Query(None),
    ls_Status: str | None = Query(None),
) -> JSONResponse:
    """Leave applications of an employee; success is `li_ErrorCode == 0` (integer)."""
    require_fields(
        {"ls_EmpCode": ls_EmpCode, "ls_DocDate": ls_DocDate},
        ["ls_EmpCode", "ls_DocDate"],
        operation="get_leave_history",
        correlation_id=correlation_id,
        message="Employee code and date are required",
    )

    with upstream_boundary("get_leave_history", "Failed to fetch leave history", correlation_id):
        reply = await gateway.call(
            "GetLeaveHistory",
            correlation_id=correlation_id,
            params={
                "EMPCode": ls_EmpCode,
                "Date": ls_DocDate,
                "Checked": ls_Check or "N",
                "Status": ls_Status or "ALL",
            },
        )

    check_outcome(
        reply,
        StatusConvention.NESTED_INT_ERROR_CODE,
        operation="get_leave_history",
        default_message="Failed to fetch leave history",
        correlation_id=correlation_id,
    )
    return ok(
        "Leave history fetched successfully",
        leaveHistory=map_records(LeaveHistoryRecordV1, reply.get("lst_ClsLeavHstryDtls")),
    )


@router.get("/pending-leave")
@inject
async def get_pending_leave_report(
    gateway: FromDishka[UpstreamGatewayProtocol],
    correlation_id: FromDishka[UUID],
    ls_EmpCode: str | None = Query(None),
    ls_Date: str | None = Query(None),
) -> JSONResponse:
    """Leave balance report with totals; success is `ls_ErrorCode == "0"` (string)."""
    require_fields(
        {"ls_EmpCode": ls_EmpCode, "ls_Date": ls_Date},
        ["ls_EmpCode", "ls_Date"],
        operation="get_pending_leave_report",
        correlation_id=correlation_id,
        message="EMPCode and Date are required.",
    )
    default_message = "Failed to fetch pending leave report"

    with upstream_boundary("get_pending_leave_report", default_message, correlation_id):
        reply = await gateway.call(
            "GetPendingLeave",
            correlation_id=correlation_id,
            params={"EMPCode": ls_EmpCode, "Date": ls_Date},
        )

    check_outcome(
        reply,
        StatusConvention.NESTED_STR_ERROR_CODE,
        operation="get_pending_leave_report",
        default_message=default_message,
        correlation_id=correlation_id,
    )
    leave_data = map_records(LeaveBalanceV1, reply.get("lst_ClsPendingLeavDtls"))
    stats = {
        "totalOpening": sum(row["openingBalance"] for row in leave_data),
        "totalClosing": sum(row["closingBalance"] for row in leave_data),
        "totalPending": sum(row["pending"] for row in leave_data),
    }
    return ok("Pending leave report fetched successfully", leaveData=leave_data, stats=stats)


@router.get("/pending-leaves")
@inject
async def get_pending_leaves(
    gateway: FromDishka[UpstreamGatewayProtocol],
    correlation_id: FromDishka[UUID],
    ls_EmpCode: str | None = Query(None),
    ls_DocDate: str | None = Query(None),
) -> JSONResponse:
    require_fields(
        {"ls_EmpCode": ls_EmpCode, "ls_DocDate": ls_DocDate},
        ["ls_EmpCode", "ls_DocDate"],
        operation="get_pending_leaves",
        correlation_id=correlation_id,
        message="Employee code and date are required",
    )

    with upstream_boundary("get_pending_leaves", "Failed to fetch pending leaves", correlation_id):
        reply = await gateway.call(
            "GetPendingLeave",
            correlation_id=correlation_id,
            params={"EMPCode": ls_EmpCode, "Date": ls_DocDate},
        )

    check_outcome(
        reply,
        StatusConvention.NESTED_STR_ERROR_CODE,
        operation="get_pending_leaves",
        default_message="Failed to fetch pending leaves",
        correlation_id=correlation_id,
    )
    return ok(
        "Pending leaves fetched successfully",
        pendingLeaves=map_records(PendingLeaveV1, reply.get("lst_ClsPendingLeavDtls")),
    )
