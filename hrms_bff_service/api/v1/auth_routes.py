"""Authentication routes: login and password change."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse

from hrms_bff_service.api.v1._boundary import SERVICE_NAME, check_outcome, upstream_boundary
from hrms_bff_service.api.v1._validation import require_fields
from hrms_bff_service.envelope import ok
from hrms_bff_service.protocols import UpstreamGatewayProtocol
from hrms_bff_service.upstream.status import StatusConvention, interpret
from hrms_service_libs.error_handling import raise_authentication_error
from hrms_service_libs.logging_utils import create_service_logger

router = APIRouter()
logger = create_service_logger("hrms_bff.auth_routes")


@router.post("/login")
@inject
async def login(
    gateway: FromDishka[UpstreamGatewayProtocol],
    correlation_id: FromDishka[UUID],
    body: dict[str, Any] | None = Body(None),
) -> JSONResponse:
    """Verify credentials with EmpLogin, then return the employee's master data."""
    body = body or {}
    require_fields(
        body,
        ["ls_EmpCode", "ls_Password"],
        operation="login",
        correlation_id=correlation_id,
        message="Employee code and password are required",
    )
    emp_code = body["ls_EmpCode"]

    with upstream_boundary("login", "Login failed", correlation_id):
        login_reply = await gateway.call(
            "EmpLogin",
            "POST",
            correlation_id=correlation_id,
            payload={"ls_EmpCode": emp_code, "ls_Password": body["ls_Password"]},
        )
        outcome = interpret(login_reply, StatusConvention.TOP_LEVEL_STATUS)
        if not outcome.success:
            logger.warning("Login rejected", emp_code=str(emp_code))
            raise_authentication_error(
                service=SERVICE_NAME,
                operation="login",
                message=outcome.message or "Authentication failed",
                correlation_id=correlation_id,
            )

        employee = await gateway.call(
            "GetEmpDetail", correlation_id=correlation_id, params={"EmpCode": emp_code}
        )

    logger.info("Login successful", emp_code=str(emp_code))
    return ok("Login successful", data={**employee, "ls_EMPCODE": emp_code})


@router.post("/change-password")
@inject
async def change_password(
    gateway: FromDishka[UpstreamGatewayProtocol],
    correlation_id: FromDishka[UUID],
    body: dict[str, Any] | None = Body(None),
) -> JSONResponse:
    body = body or {}
    fields = ["ls_EmpCode", "ls_OldPassword", "ls_NewPassword"]
    require_fields(
        body,
        fields,
        operation="change_password",
        correlation_id=correlation_id,
        message="All password fields are required",
    )

    with upstream_boundary("change_password", "Password change failed", correlation_id):
        reply = await gateway.call(
            "EmpPswdChang",
            "POST",
            correlation_id=correlation_id,
            payload={field: body[field] for field in fields},
        )

    outcome = check_outcome(
        reply,
        StatusConvention.TOP_LEVEL_STATUS,
        operation="change_password",
        default_message="Password change failed",
        correlation_id=correlation_id,
    )
    return ok(outcome.message or "Password changed successfully")
