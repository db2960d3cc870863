"""Attendance routes: daily and monthly reports, out-duty punches, reverse geocoding."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Body, Query
from fastapi.responses import JSONResponse

from hrms_bff_service.api.v1._boundary import SERVICE_NAME, check_outcome, upstream_boundary
from hrms_bff_service.api.v1._validation import require_fields
from hrms_bff_service.config import HRMSBFFSettings
from hrms_bff_service.dto.records_v1 import (
    AttendanceRecordV1,
    MonthlyAttendanceRecordV1,
    map_records,
)
from hrms_bff_service.dto.requests_v1 import build_out_duty_punch
from hrms_bff_service.envelope import ok
from hrms_bff_service.geocoding import normalize_address
from hrms_bff_service.protocols import GeocodingClientProtocol, UpstreamGatewayProtocol
from hrms_bff_service.upstream.status import StatusConvention, interpret
from hrms_service_libs.error_handling import (
    raise_configuration_error,
    raise_upstream_business_error,
    raise_validation_error,
)
from hrms_service_libs.logging_utils import create_service_logger

router = APIRouter()
logger = create_service_logger("hrms_bff.attendance_routes")

PUNCH_LABELS = {"I": "check-in", "O": "check-out"}


@router.get("/attendance")
@inject
async def get_attendance(
    gateway: FromDishka[UpstreamGatewayProtocol],
    correlation_id: FromDishka[UUID],
    ls_EmpCode: str | None = Query(None),
    ls_Month: str | None = Query(None),
) -> JSONResponse:
    """Daily attendance for one employee and month."""
    require_fields(
        {"ls_EmpCode": ls_EmpCode, "ls_Month": ls_Month},
        ["ls_EmpCode", "ls_Month"],
        operation="get_attendance",
        correlation_id=correlation_id,
        message="EMPCode and Month are required.",
    )
    default_message = "Failed to fetch attendance report"

    with upstream_boundary("get_attendance", default_message, correlation_id):
        reply = await gateway.call(
            "GetAttendanceRpt",
            correlation_id=correlation_id,
            params={"Month": ls_Month, "EMPCode": ls_EmpCode},
        )

    check_outcome(
        reply,
        StatusConvention.NESTED_STATUS,
        operation="get_attendance",
        default_message=default_message,
        correlation_id=correlation_id,
    )
    return ok(
        "Attendance report fetched successfully",
        attendanceData=map_records(AttendanceRecordV1, reply.get("lst_ClsAttndncRptDtls")),
    )


@router.get("/monthly-attendance")
@inject
async def get_monthly_attendance(
    gateway: FromDishka[UpstreamGatewayProtocol],
    correlation_id: FromDishka[UUID],
    ls_FromDate: str | None = Query(None),
    ls_ToDate: str | None = Query(None),
    ls_EmpCode: str | None = Query(None),
) -> JSONResponse:
    """Per-day attendance over a date range."""
    require_fields(
        {"ls_FromDate": ls_FromDate, "ls_ToDate": ls_ToDate, "ls_EmpCode": ls_EmpCode},
        ["ls_FromDate", "ls_ToDate", "ls_EmpCode"],
        operation="get_monthly_attendance",
        correlation_id=correlation_id,
        message="FromDate, ToDate, and EMPCode are required.",
    )
    default_message = "Failed to fetch monthly attendance report"

    with upstream_boundary("get_monthly_attendance", default_message, correlation_id):
        reply = await gateway.call(
            "GetMnthlyAttndRpt",
            correlation_id=correlation_id,
            params={"FromDate": ls_FromDate, "ToDate": ls_ToDate, "EMPCode": ls_EmpCode},
        )

    check_outcome(
        reply,
        StatusConvention.NESTED_STATUS,
        operation="get_monthly_attendance",
        default_message=default_message,
        correlation_id=correlation_id,
    )
    return ok(
        "Monthly attendance report fetched successfully",
        attendanceData=map_records(
            MonthlyAttendanceRecordV1, reply.get("lst_ClsMnthlyAttndncRptDtls")
        ),
    )


@router.post("/out-duty")
@inject
async def record_out_duty(
    gateway: FromDishka[UpstreamGatewayProtocol],
    correlation_id: FromDishka[UUID],
    body: dict[str, Any] | None = Body(None),
) -> JSONResponse:
    """Record an out-duty check-in (`I`) or check-out (`O`) at the current time."""
    body = body or {}
    require_fields(
        body,
        ["ls_EmpCode", "ls_Type", "ls_Latitude", "ls_Longitude"],
        operation="record_out_duty",
        correlation_id=correlation_id,
        message="Employee code, type, latitude, and longitude are required",
    )
    punch_type = body["ls_Type"]
    if not isinstance(punch_type, str) or punch_type not in PUNCH_LABELS:
        raise_validation_error(
            service=SERVICE_NAME,
            operation="record_out_duty",
            field="ls_Type",
            message="Type must be 'I' for In or 'O' for Out",
            correlation_id=correlation_id,
            value=punch_type,
        )
    label = PUNCH_LABELS[punch_type]
    default_message = f"Failed to record {label}"

    payload = build_out_duty_punch(body)
    logger.info("Recording out-duty punch", punch_type=punch_type, date=payload["ls_Date"])

    with upstream_boundary("record_out_duty", default_message, correlation_id):
        reply = await gateway.call(
            "EmpOutDuty", "POST", correlation_id=correlation_id, payload=payload
        )

    outcome = check_outcome(
        reply,
        StatusConvention.TOP_LEVEL_STATUS,
        operation="record_out_duty",
        default_message=default_message,
        correlation_id=correlation_id,
    )
    return ok(outcome.message or f"{label.capitalize()} recorded successfully", data=reply)


@router.post("/reverse-geocode")
@inject
async def reverse_geocode(
    geocoder: FromDishka[GeocodingClientProtocol],
    config: FromDishka[HRMSBFFSettings],
    correlation_id: FromDishka[UUID],
    body: dict[str, Any] | None = Body(None),
) -> JSONResponse:
    """Resolve a coordinate to a short location name via Google Geocoding."""
    body = body or {}
    require_fields(
        body,
        ["latitude", "longitude"],
        operation="reverse_geocode",
        correlation_id=correlation_id,
        message="Latitude and longitude are required",
    )
    if not config.GOOGLE_MAPS_API_KEY:
        logger.warning("Google Maps API key not configured")
        raise_configuration_error(
            service=SERVICE_NAME,
            operation="reverse_geocode",
            config_key="GOOGLE_MAPS_API_KEY",
            message="Google Maps API key not configured",
            correlation_id=correlation_id,
        )

    with upstream_boundary("reverse_geocode", "Failed to fetch address", correlation_id):
        reply = await geocoder.reverse_geocode(
            str(body["latitude"]),
            str(body["longitude"]),
            config.GOOGLE_MAPS_API_KEY,
            correlation_id,
        )

    results = reply.get("results") or []
    if reply.get("status") != "OK" or not results:
        raise_upstream_business_error(
            service=SERVICE_NAME,
            operation="reverse_geocode",
            message="Unable to fetch location name from Google Maps API",
            correlation_id=correlation_id,
            provider_status=reply.get("status"),
        )

    result = results[0]
    return ok(
        "Address fetched successfully",
        address=normalize_address(result),
        fullAddress=result.get("formatted_address", ""),
        data=result,
    )


async def _out_duty_list(
    gateway: UpstreamGatewayProtocol,
    correlation_id: UUID,
    *,
    endpoint: str,
    list_field: str,
    operation: str,
    emp_code: str | None,
    date: str | None,
    found_message: str,
    empty_message: str,
    default_message: str,
) -> JSONResponse:
    require_fields(
        {"empCode": emp_code, "date": date},
        ["empCode", "date"],
        operation=operation,
        correlation_id=correlation_id,
        message="Employee code and date are required",
    )
    with upstream_boundary(operation, default_message, correlation_id):
        reply = await gateway.call(
            endpoint, correlation_id=correlation_id, params={"EmpCode": emp_code, "Date": date}
        )

    if interpret(reply, StatusConvention.LIST_PRESENCE, list_field).success:
        return ok(found_message, data=reply[list_field])
    return ok(empty_message, data=[])


@router.get("/latest-out-duty")
@inject
async def get_latest_out_duty(
    gateway: FromDishka[UpstreamGatewayProtocol],
    correlation_id: FromDishka[UUID],
    empCode: str | None = Query(None),
    date: str | None = Query(None),
) -> JSONResponse:
    return await _out_duty_list(
        gateway,
        correlation_id,
        endpoint="GetLatestOutDuty",
        list_field="lst_ClsLatestOutDutyDtls",
        operation="get_latest_out_duty",
        emp_code=empCode,
        date=date,
        found_message="Latest out-duty data fetched successfully",
        empty_message="No out-duty data found",
        default_message="Failed to fetch latest out-duty data",
    )


@router.get("/out-duty-history")
@inject
async def get_out_duty_history(
    gateway: FromDishka[UpstreamGatewayProtocol],
    correlation_id: FromDishka[UUID],
    empCode: str | None = Query(None),
    date: str | None = Query(None),
) -> JSONResponse:
    return await _out_duty_list(
        gateway,
        correlation_id,
        endpoint="GetOutDuty",
        list_field="lst_ClsOutDutyDtls",
        operation="get_out_duty_history",
        emp_code=empCode,
        date=date,
        found_message="Out-duty history fetched successfully",
        empty_message="No out-duty history found",
        default_message="Failed to fetch out-duty history",
    )
