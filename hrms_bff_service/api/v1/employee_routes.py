"""Employee routes: master data, directory, organization chart and photos."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Body, Query
from fastapi.responses import FileResponse, JSONResponse

from hrms_bff_service.api.v1._boundary import SERVICE_NAME, check_outcome, upstream_boundary
from hrms_bff_service.api.v1._validation import require_fields
from hrms_bff_service.dto.records_v1 import (
    EmployeeDetailsV1,
    EmployeeListItemV1,
    EmployeeSearchResultV1,
    OrgChartManagerV1,
    OrgChartMemberV1,
    OrgChartSubordinateV1,
    map_records,
)
from hrms_bff_service.envelope import ok
from hrms_bff_service.file_delivery import file_exists
from hrms_bff_service.protocols import UpstreamGatewayProtocol
from hrms_bff_service.upstream.status import StatusConvention
from hrms_service_libs.error_handling import (
    raise_missing_required_field,
    raise_not_implemented,
    raise_resource_not_found,
)
from hrms_service_libs.logging_utils import create_service_logger

router = APIRouter()
logger = create_service_logger("hrms_bff.employee_routes")


async def _employee_detail(
    gateway: UpstreamGatewayProtocol,
    correlation_id: UUID,
    emp_code: str | None,
    *,
    operation: str,
    default_message: str,
) -> EmployeeDetailsV1:
    require_fields(
        {"empCode": emp_code},
        ["empCode"],
        operation=operation,
        correlation_id=correlation_id,
        message="Employee code is required",
    )
    with upstream_boundary(operation, default_message, correlation_id):
        reply = await gateway.call(
            "GetEmpDetail", correlation_id=correlation_id, params={"EmpCode": emp_code}
        )

    check_outcome(
        reply,
        StatusConvention.EITHER_STATUS,
        operation=operation,
        default_message=default_message,
        correlation_id=correlation_id,
    )
    employee = EmployeeDetailsV1.model_validate(reply)
    if not employee.emp_code:
        employee = employee.model_copy(update={"emp_code": emp_code})
    return employee


@router.get("/employee-details")
@inject
async def get_employee_details(
    gateway: FromDishka[UpstreamGatewayProtocol],
    correlation_id: FromDishka[UUID],
    empCode: str | None = Query(None),
) -> JSONResponse:
    employee = await _employee_detail(
        gateway,
        correlation_id,
        empCode,
        operation="get_employee_details",
        default_message="Failed to fetch employee details",
    )
    return ok("Employee details fetched successfully", employee=employee.to_client())


@router.get("/profile-summary")
@inject
async def get_profile_summary(
    gateway: FromDishka[UpstreamGatewayProtocol],
    correlation_id: FromDishka[UUID],
    empCode: str | None = Query(None),
) -> JSONResponse:
    """Employee master data grouped into basic, contact, personal and reporting info."""
    employee = await _employee_detail(
        gateway,
        correlation_id,
        empCode,
        operation="get_profile_summary",
        default_message="Failed to fetch profile summary",
    )
    return ok("Profile summary fetched successfully", profile=employee.profile_summary())


@router.get("/employee-list")
@inject
async def get_employee_list(
    gateway: FromDishka[UpstreamGatewayProtocol],
    correlation_id: FromDishka[UUID],
    department: str | None = Query(None),
    branch: str | None = Query(None),
    page: int = Query(1),
    limit: int = Query(50),
) -> JSONResponse:
    params: dict[str, Any] = {}
    if department:
        params["Department"] = department
    if branch:
        params["Branch"] = branch
    params["Page"] = page
    params["Limit"] = limit

    default_message = "Failed to fetch employee list"
    with upstream_boundary("get_employee_list", default_message, correlation_id):
        reply = await gateway.call("GetEmployeeList", correlation_id=correlation_id, params=params)

    check_outcome(
        reply,
        StatusConvention.NESTED_STATUS,
        operation="get_employee_list",
        default_message=default_message,
        correlation_id=correlation_id,
    )
    employees = map_records(EmployeeListItemV1, reply.get("lst_ClsEmpListDtls"))
    return ok(
        "Employee list fetched successfully",
        employees=employees,
        total=reply.get("li_TotalRecords") or len(employees),
        page=page,
        limit=limit,
    )


@router.get("/org-chart")
@inject
async def get_org_chart(
    gateway: FromDishka[UpstreamGatewayProtocol],
    correlation_id: FromDishka[UUID],
    empCode: str | None = Query(None),
) -> JSONResponse:
    """Manager, subordinates and peers of an employee."""
    require_fields(
        {"empCode": empCode},
        ["empCode"],
        operation="get_org_chart",
        correlation_id=correlation_id,
        message="Employee code is required",
    )
    default_message = "Failed to fetch organization chart"
    with upstream_boundary("get_org_chart", default_message, correlation_id):
        reply = await gateway.call(
            "GetOrgChart", correlation_id=correlation_id, params={"EmpCode": empCode}
        )

    check_outcome(
        reply,
        StatusConvention.NESTED_STATUS,
        operation="get_org_chart",
        default_message=default_message,
        correlation_id=correlation_id,
    )
    current = OrgChartMemberV1.model_validate(reply).to_client()
    current["empCode"] = current["empCode"] or empCode
    org_chart = {
        "currentEmployee": current,
        "manager": OrgChartManagerV1.model_validate(reply).to_client()
        if reply.get("ls_ManagerCode")
        else None,
        "subordinates": map_records(OrgChartSubordinateV1, reply.get("lst_ClsSubordinateDtls")),
        "peers": map_records(OrgChartMemberV1, reply.get("lst_ClsPeerDtls")),
    }
    return ok("Organization chart fetched successfully", orgChart=org_chart)


@router.get("/statistics")
@inject
async def get_statistics(
    correlation_id: FromDishka[UUID],
    empCode: str | None = Query(None),
) -> JSONResponse:
    """Attendance and leave statistics; no upstream operation serves these yet."""
    require_fields(
        {"empCode": empCode},
        ["empCode"],
        operation="get_statistics",
        correlation_id=correlation_id,
        message="Employee code is required",
    )
    raise_not_implemented(
        service=SERVICE_NAME,
        operation="get_statistics",
        message="Employee statistics are not available: no upstream integration",
        correlation_id=correlation_id,
    )


@router.post("/update-profile")
@inject
async def update_profile(
    correlation_id: FromDishka[UUID],
    body: dict[str, Any] | None = Body(None),
) -> JSONResponse:
    """Profile edits; no upstream operation accepts them yet."""
    require_fields(
        body or {},
        ["empCode"],
        operation="update_profile",
        correlation_id=correlation_id,
        message="Employee code is required",
    )
    raise_not_implemented(
        service=SERVICE_NAME,
        operation="update_profile",
        message="Profile updates are not available: no upstream integration",
        correlation_id=correlation_id,
    )


@router.get("/search")
@inject
async def search_employees(
    gateway: FromDishka[UpstreamGatewayProtocol],
    correlation_id: FromDishka[UUID],
    query: str | None = Query(None),
    department: str | None = Query(None),
    branch: str | None = Query(None),
    limit: int = Query(20),
) -> JSONResponse:
    criteria = {"query": query, "department": department, "branch": branch}
    if not any(criteria.values()):
        raise_missing_required_field(
            service=SERVICE_NAME,
            operation="search_employees",
            missing_fields=list(criteria),
            message="At least one search parameter is required",
            correlation_id=correlation_id,
        )

    params: dict[str, Any] = {}
    for upstream_name, value in (("SearchQuery", query), ("Department", department), ("Branch", branch)):
        if value:
            params[upstream_name] = value
    params["Limit"] = limit

    default_message = "Failed to search employees"
    with upstream_boundary("search_employees", default_message, correlation_id):
        reply = await gateway.call("SearchEmployees", correlation_id=correlation_id, params=params)

    check_outcome(
        reply,
        StatusConvention.NESTED_STATUS,
        operation="search_employees",
        default_message=default_message,
        correlation_id=correlation_id,
    )
    results = map_records(EmployeeSearchResultV1, reply.get("lst_ClsEmpSearchDtls"))
    return ok(
        "Employee search completed successfully",
        results=results,
        totalResults=len(results),
        searchParams={key: value for key, value in criteria.items() if value},
    )


@router.get("/employee-image", response_model=None)
@inject
async def get_employee_image(
    correlation_id: FromDishka[UUID],
    imagePath: str | None = Query(None),
) -> FileResponse:
    """Serve an employee photo from a local absolute path."""
    require_fields(
        {"imagePath": imagePath},
        ["imagePath"],
        operation="get_employee_image",
        correlation_id=correlation_id,
        message="Image path is required",
    )
    if not await file_exists(imagePath):
        raise_resource_not_found(
            service=SERVICE_NAME,
            operation="get_employee_image",
            resource_type="employee_image",
            resource_id=imagePath,
            correlation_id=correlation_id,
            message="Image not found",
        )
    return FileResponse(imagePath)
