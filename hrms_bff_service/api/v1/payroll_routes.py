"""Payroll routes: loans, allowance claims and salary slips."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from uuid import UUID

import httpx
from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Body, Query, Request
from fastapi.responses import JSONResponse, StreamingResponse
from starlette.datastructures import UploadFile

from hrms_bff_service.api.v1._boundary import SERVICE_NAME, check_outcome, upstream_boundary
from hrms_bff_service.api.v1._validation import require_fields
from hrms_bff_service.dto.records_v1 import AllowanceTypeV1, map_records
from hrms_bff_service.dto.requests_v1 import build_loan_application
from hrms_bff_service.envelope import envelope, ok
from hrms_bff_service.file_delivery import decode_path, file_exists, one_shot_pdf_response
from hrms_bff_service.protocols import UpstreamGatewayProtocol
from hrms_bff_service.upstream.status import StatusConvention
from hrms_bff_service.uploads import AllowanceAttachmentStore, validate_allowance_entries
from hrms_service_libs.error_handling import (
    raise_resource_not_found,
    raise_upstream_business_error,
    raise_upstream_transport_error,
    raise_validation_error,
)
from hrms_service_libs.logging_utils import create_service_logger

router = APIRouter()
logger = create_service_logger("hrms_bff.payroll_routes")


# --- Loans ---


@router.get("/loan-types")
@inject
async def get_loan_types(
    gateway: FromDishka[UpstreamGatewayProtocol],
    correlation_id: FromDishka[UUID],
) -> JSONResponse:
    """Loan type master list; an empty list is reported as `success: false` with 200."""
    with upstream_boundary("get_loan_types", "Failed to fetch loan types", correlation_id):
        reply = await gateway.call("GetLoanTypes", correlation_id=correlation_id)

    loan_types = reply.get("lst_ClsMstrLoanTypDtls")
    if not loan_types:
        return envelope(False, "No loan types available", loanTypes=[])
    return ok("Loan types fetched successfully", loanTypes=loan_types)


@router.post("/apply-loan")
@inject
async def apply_loan(
    gateway: FromDishka[UpstreamGatewayProtocol],
    correlation_id: FromDishka[UUID],
    body: dict[str, Any] | None = Body(None),
) -> JSONResponse:
    body = body or {}
    require_fields(
        body,
        ["ls_EmpCode", "ls_LoanTyp", "ls_ReqAmnt", "ls_NoOfEmi", "ls_Reason"],
        operation="apply_loan",
        correlation_id=correlation_id,
    )
    payload = build_loan_application(body)
    logger.info("Submitting loan application", loan_type=payload["ls_LoanTyp"])

    with upstream_boundary(
        "apply_loan", "Loan application failed", correlation_id, error_reply_status=400
    ):
        reply = await gateway.call("LoanApply", "POST", correlation_id=correlation_id, payload=payload)

    outcome = check_outcome(
        reply,
        StatusConvention.TOP_LEVEL_STATUS,
        operation="apply_loan",
        default_message="Loan application failed - please check your details and try again",
        correlation_id=correlation_id,
        envelope={"apiResponse": reply},
    )
    return ok(outcome.message or "Loan application submitted successfully", data=reply)


# --- Allowances ---


@router.get("/allowance-types")
@inject
async def get_allowance_types(
    gateway: FromDishka[UpstreamGatewayProtocol],
    correlation_id: FromDishka[UUID],
) -> JSONResponse:
    default_message = "Failed to fetch allowance types"
    with upstream_boundary("get_allowance_types", default_message, correlation_id):
        reply = await gateway.call("GetAllowenceTypes", correlation_id=correlation_id)

    check_outcome(
        reply,
        StatusConvention.NESTED_STATUS,
        operation="get_allowance_types",
        default_message=default_message,
        correlation_id=correlation_id,
    )
    return ok(
        "Allowance types fetched successfully",
        allowanceTypes=map_records(AllowanceTypeV1, reply.get("lst_ClsMstrAllowenceTypDtls")),
    )


async def _read_allowance_claim(
    request: Request, correlation_id: UUID
) -> tuple[Any, Any, list[tuple[str, UploadFile]]]:
    """Read month, entries and uploads from a JSON or multipart request."""
    uploads: list[tuple[str, UploadFile]] = []
    if request.headers.get("content-type", "").startswith("multipart/form-data"):
        form = await request.form()
        month: Any = form.get("ls_MONTH")
        entries: Any = form.get("lst_ClsAllowenceApplyDtl")
        uploads = [(key, value) for key, value in form.multi_items() if isinstance(value, UploadFile)]
    else:
        try:
            body = await request.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            raise_validation_error(
                service=SERVICE_NAME,
                operation="allowance_apply",
                field="body",
                message="Invalid request data",
                correlation_id=correlation_id,
            )
        month = body.get("ls_MONTH")
        entries = body.get("lst_ClsAllowenceApplyDtl")

    if isinstance(entries, str):
        try:
            entries = json.loads(entries)
        except ValueError:
            raise_validation_error(
                service=SERVICE_NAME,
                operation="allowance_apply",
                field="lst_ClsAllowenceApplyDtl",
                message="Allowance entries must be valid JSON",
                correlation_id=correlation_id,
            )
    return month, entries, uploads


@router.post("/allowance-apply")
@inject
async def apply_allowance(
    request: Request,
    gateway: FromDishka[UpstreamGatewayProtocol],
    attachments: FromDishka[AllowanceAttachmentStore],
    correlation_id: FromDishka[UUID],
) -> JSONResponse:
    """Submit allowance claims, as JSON or multipart with file attachments.

    In multipart requests `lst_ClsAllowenceApplyDtl` is a JSON string and
    each file reference's `ls_FILEPATH` names the form field of its upload.
    """
    month, entries, uploads = await _read_allowance_claim(request, correlation_id)

    require_fields(
        {"ls_MONTH": month},
        ["ls_MONTH"],
        operation="allowance_apply",
        correlation_id=correlation_id,
        message="Month is required",
    )
    problem = validate_allowance_entries(entries)
    if problem:
        raise_validation_error(
            service=SERVICE_NAME,
            operation="allowance_apply",
            field="lst_ClsAllowenceApplyDtl",
            message=problem,
            correlation_id=correlation_id,
        )

    pending = [await attachments.accept(name, upload, correlation_id) for name, upload in uploads]
    stored = await attachments.save_all(pending, correlation_id)

    payload = {
        "ls_MONTH": month,
        "lst_ClsAllowenceApplyDtl": attachments.build_entries(entries, stored),
    }
    logger.info(
        "Submitting allowance claim",
        month=month,
        entries_count=len(entries),
        files_count=len(stored),
    )

    with upstream_boundary(
        "allowance_apply", "Allowance application failed", correlation_id, error_reply_status=400
    ):
        reply = await gateway.call(
            "AllowenceApply", "POST", correlation_id=correlation_id, payload=payload
        )

    outcome = check_outcome(
        reply,
        StatusConvention.TOP_LEVEL_STATUS,
        operation="allowance_apply",
        default_message="Allowance application failed - please check your details and try again",
        correlation_id=correlation_id,
        envelope={"apiResponse": reply},
    )
    return ok(outcome.message or "Allowance applied successfully", data=reply)


@router.post("/allowance-delete")
@inject
async def delete_allowance(
    gateway: FromDishka[UpstreamGatewayProtocol],
    correlation_id: FromDishka[UUID],
    body: dict[str, Any] | None = Body(None),
) -> JSONResponse:
    body = body or {}
    require_fields(
        body,
        ["ls_DocEntry"],
        operation="allowance_delete",
        correlation_id=correlation_id,
        message="Document entry is required",
    )

    with upstream_boundary("allowance_delete", "Failed to delete allowance", correlation_id):
        reply = await gateway.call(
            "AllowenceDelete",
            "POST",
            correlation_id=correlation_id,
            payload={"ls_DocEntry": body["ls_DocEntry"]},
        )

    outcome = check_outcome(
        reply,
        StatusConvention.TOP_LEVEL_STATUS,
        operation="allowance_delete",
        default_message="Failed to delete allowance",
        correlation_id=correlation_id,
    )
    return ok(outcome.message or "Allowance deleted successfully", data=reply)


# --- Salary slips ---


@router.post("/salary-slip/generate")
@inject
async def generate_salary_slip(
    gateway: FromDishka[UpstreamGatewayProtocol],
    correlation_id: FromDishka[UUID],
    body: dict[str, Any] | None = Body(None),
) -> JSONResponse:
    """Ask the upstream to render a salary slip PDF and return its path.

    Generation can take minutes; the endpoint's timeout comes from
    `UPSTREAM_TIMEOUTS["PaySlipGenerate"]`.
    """
    body = body or {}
    require_fields(
        body,
        ["ls_Month", "ls_EmpCode"],
        operation="generate_salary_slip",
        correlation_id=correlation_id,
        message="Month and Employee Code are required",
    )

    try:
        reply = await gateway.call(
            "PaySlipGenerate",
            "POST",
            correlation_id=correlation_id,
            payload={"ls_Month": body["ls_Month"], "ls_EmpCode": body["ls_EmpCode"]},
        )
    except httpx.HTTPError as e:
        logger.error("Salary slip generation error", error=str(e), error_type=type(e).__name__)
        raise_upstream_transport_error(
            service=SERVICE_NAME,
            operation="generate_salary_slip",
            message="Salary slip generation failed",
            correlation_id=correlation_id,
            status_code=500,
        )

    outcome = check_outcome(
        reply,
        StatusConvention.NESTED_INT_ERROR_CODE,
        operation="generate_salary_slip",
        default_message="PDF not generated",
        correlation_id=correlation_id,
    )
    slip_path = reply.get("ls_Path")
    if not isinstance(slip_path, str):
        raise_upstream_business_error(
            service=SERVICE_NAME,
            operation="generate_salary_slip",
            message=outcome.message or "PDF not generated",
            correlation_id=correlation_id,
        )
    return ok(outcome.message or "Salary slip generated successfully", ls_Path=slip_path)


async def _existing_slip(file_path: str | None, operation: str, correlation_id: UUID) -> Path:
    path = decode_path(file_path)
    if not await file_exists(path):
        logger.warning("Salary slip not found", file_path=path)
        raise_resource_not_found(
            service=SERVICE_NAME,
            operation=operation,
            resource_type="salary_slip",
            resource_id=path,
            correlation_id=correlation_id,
            message="PDF file not found",
        )
    return Path(path)


@router.get("/salary-slip/view", response_model=None)
@inject
async def view_salary_slip(
    correlation_id: FromDishka[UUID],
    filePath: str | None = Query(None),
) -> StreamingResponse:
    """Stream a generated slip inline; the file is deleted once delivered."""
    path = await _existing_slip(filePath, "view_salary_slip", correlation_id)
    return one_shot_pdf_response(path, as_attachment=False)


@router.get("/salary-slip/download", response_model=None)
@inject
async def download_salary_slip(
    correlation_id: FromDishka[UUID],
    filePath: str | None = Query(None),
) -> StreamingResponse:
    """Stream a generated slip as an attachment; the file is deleted once delivered."""
    path = await _existing_slip(filePath, "download_salary_slip", correlation_id)
    return one_shot_pdf_response(path, as_attachment=True)
