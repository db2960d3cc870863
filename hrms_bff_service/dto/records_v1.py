"""HRMS BFF v1 record DTOs.

Each model reads one upstream record, keyed by its Hungarian-notation field
names (`ls_EmpCode`, `ls_LeavTyp`), and serializes to the camelCase shape the
HRMS web client consumes. Mapping is total: a missing or null upstream field
takes the field's default (`""`, `0` or `None`) instead of failing.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable
from typing import Annotated, Any

from pydantic import AliasGenerator, BaseModel, BeforeValidator, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

_LEADING_FLOAT = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def parse_lenient_float(value: Any) -> float:
    """Parse a leading decimal number, falling back to 0.

    Mirrors how the web client reads upstream amounts: `"2.5 days"` is 2.5,
    `""` and `"N/A"` are 0.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value) if value == value else 0.0
    if not isinstance(value, str):
        return 0.0
    match = _LEADING_FLOAT.match(value)
    return float(match.group(0)) if match else 0.0


LenientFloat = Annotated[float, BeforeValidator(parse_lenient_float)]


def _or(default: str) -> Callable[[Any], Any]:
    """Replace empty values with `default`, as the web client expects."""

    def _apply(value: Any) -> Any:
        return value if value not in ("", 0) else default

    return _apply


def _as_text(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return value


class UpstreamRecord(BaseModel):
    """Base for records read from the upstream HR service."""

    model_config = ConfigDict(
        alias_generator=AliasGenerator(serialization_alias=to_camel),
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _normalize_values(cls, data: Any) -> Any:
        """Drop nulls and render booleans, lists and objects as text."""
        if isinstance(data, dict):
            return {key: _as_text(value) for key, value in data.items() if value is not None}
        return data

    def to_client(self) -> dict[str, Any]:
        """Serialize with camelCase keys for the web client."""
        return self.model_dump(by_alias=True, mode="json")


# --- Attendance ---


class AttendanceRecordV1(UpstreamRecord):
    """Daily attendance row from GetAttendanceRpt."""

    emp_code: str = Field("", validation_alias="ls_EmpCode")
    emp_name: str = Field("", validation_alias="ls_EmpName")
    day_type: str = Field("", validation_alias="ls_DayType")
    late_mark: str = Field("", validation_alias="ls_LateMark")
    man_in_date: str = Field("", validation_alias="ls_ManInDt")
    man_in_time: str = Field("", validation_alias="ls_ManInTm")
    man_out_date: str = Field("", validation_alias="ls_ManOutDt")
    man_out_time: str = Field("", validation_alias="ls_ManOutTm")
    man_total_time: str = Field("", validation_alias="ls_ManTotTm")
    sys_in_date: str = Field("", validation_alias="ls_SysInDt")
    sys_in_time: str = Field("", validation_alias="ls_SysInTm")
    sys_out_date: str = Field("", validation_alias="ls_SysOutDt")
    sys_out_time: str = Field("", validation_alias="ls_SysOutTm")
    sys_total_time: str = Field("", validation_alias="ls_SysTotTm")


class MonthlyAttendanceRecordV1(UpstreamRecord):
    """Per-day row from GetMnthlyAttndRpt."""

    emp_code: str = Field("", validation_alias="ls_EmpCode")
    emp_name: str = Field("", validation_alias="ls_EmpName")
    emp_type: str = Field("", validation_alias="ls_EmpType")
    department: str = Field("", validation_alias="ls_Department")
    bpl_id: str = Field("", validation_alias="ls_BPLID")
    bpl_name: str = Field("", validation_alias="ls_BPLNAME")
    work_date: str = Field("", validation_alias="ls_WorkDate")
    day_name: str = Field("", validation_alias="ls_DayName")
    week_day: str = Field("", validation_alias="ls_WeekDay")
    leave_type: str = Field("", validation_alias="ls_LeaveType")
    in_time: str = Field("", validation_alias="ls_InTm")
    out_time: str = Field("", validation_alias="ls_OutTm")
    total_hours: Annotated[str, BeforeValidator(_or("0"))] = Field("0", validation_alias="ls_Tothrs")
    late_mark: str = Field("", validation_alias="ls_LateMark")
    attendance_status: str = Field("", validation_alias="ls_AttndStatus")


# --- Leave ---


class LeaveTypeV1(UpstreamRecord):
    """Leave type master row from GetLeaveTypes."""

    code: str = Field("", validation_alias="ls_CODE")
    name: str = Field("", validation_alias="ls_NAME")
    description: str = Field("", validation_alias="ls_DESC")


def _date_part(value: Any) -> Any:
    # "26-01-2025 00:00:00" -> "26-01-2025"
    return value.split(" ")[0] if isinstance(value, str) else value


class LeaveHistoryRecordV1(UpstreamRecord):
    """Leave application row from GetLeaveHistory."""

    leave_type: str = Field("", validation_alias="ls_LeavTyp")
    leave_name: str = Field("", validation_alias="ls_LeavName")
    leave_date: Annotated[str, BeforeValidator(_date_part)] = Field(
        "", validation_alias="ls_LeavDate"
    )
    status: str = Field("", validation_alias="ls_Status")
    from_date: str = Field("", validation_alias="ls_FromDate")
    to_date: str = Field("", validation_alias="ls_ToDate")
    no_of_days: LenientFloat = Field(0.0, validation_alias="ls_NoOfDays")
    open_leave: LenientFloat = Field(0.0, validation_alias="ls_OpenLeav")
    used_leave: LenientFloat = Field(0.0, validation_alias="ls_UsedLeav")
    reason: str = Field("", validation_alias="ls_Reason")


class LeaveBalanceV1(UpstreamRecord):
    """Leave balance row from GetPendingLeave, with numeric balances."""

    leave_name: str = Field("", validation_alias="ls_LeavName")
    leave_type: str = Field("", validation_alias="ls_LeavTyp")
    opening_balance: LenientFloat = Field(0.0, validation_alias="ls_OpenLeav")
    used: LenientFloat = Field(0.0, validation_alias="ls_UsedLeav")
    pending: LenientFloat = Field(0.0, validation_alias="ls_PendLeav")
    rejected: LenientFloat = Field(0.0, validation_alias="ls_RejLeav")
    closing_balance: LenientFloat = Field(0.0, validation_alias="ls_CloseLeav")


class PendingLeaveV1(UpstreamRecord):
    """Leave balance row from GetPendingLeave, balances passed through as text."""

    leave_type: str = Field("", validation_alias="ls_LeavTyp")
    leave_name: str = Field("", validation_alias="ls_LeavName")
    open_leave: str = Field("", validation_alias="ls_OpenLeav")
    used_leave: str = Field("", validation_alias="ls_UsedLeav")
    pending_leave: str = Field("", validation_alias="ls_PendLeav")


# --- Holiday ---


def to_iso_date(value: Any) -> Any:
    """Convert `DD-MM-YYYY[ hh:mm:ss]` to `YYYY-MM-DD`; other shapes pass through."""
    if not isinstance(value, str):
        return value
    date_part = value.split(" ")[0]
    parts = date_part.split("-")
    if len(parts) == 3 and len(parts[2]) == 4:
        day, month, year = parts
        return f"{year}-{month}-{day}"
    return date_part


class HolidayV1(UpstreamRecord):
    """Holiday row from GetHolidayRpt."""

    holiday_date: Annotated[str, BeforeValidator(to_iso_date)] = Field(
        "", validation_alias="ls_HldDate"
    )
    reason: str = Field("", validation_alias="ls_Reason")


# --- Payroll ---


class AllowanceTypeV1(UpstreamRecord):
    """Allowance type master row from GetAllowenceTypes."""

    code: str = Field("", validation_alias="ls_CODE")
    name: str = Field("", validation_alias="ls_NAME")
    file_path: str = Field("", validation_alias="ls_FinalFilePath")


# --- Employee ---


class EmployeeDetailsV1(UpstreamRecord):
    """Employee master data from GetEmpDetail."""

    emp_code: str = Field("", validation_alias="ls_EMPCODE")
    emp_name: str = Field("", validation_alias="ls_EmpName")
    department: str = Field("", validation_alias="ls_DeptName")
    designation: str = Field("", validation_alias="ls_Designation")
    branch: str = Field("", validation_alias="ls_BranchName")
    email: str = Field("", validation_alias="ls_Email")
    mobile: str = Field("", validation_alias="ls_Mobile")
    joining_date: str = Field("", validation_alias="ls_JoinDate")
    employee_type: str = Field("", validation_alias="ls_EmpType")
    manager_name: str = Field("", validation_alias="ls_ManagerName")
    manager_code: str = Field("", validation_alias="ls_ManagerCode")
    photo_path: str = Field("", validation_alias="ls_PhotoPath")
    birth_date: str = Field("", validation_alias="ls_BirthDate")
    gender: str = Field("", validation_alias="ls_Gender")
    marital_status: str = Field("", validation_alias="ls_MaritalStatus")
    blood_group: str = Field("", validation_alias="ls_BloodGroup")
    address: str = Field("", validation_alias="ls_Address")
    city: str = Field("", validation_alias="ls_City")
    state: str = Field("", validation_alias="ls_State")
    country: str = Field("", validation_alias="ls_Country")
    pincode: str = Field("", validation_alias="ls_PinCode")

    def profile_summary(self) -> dict[str, Any]:
        """Group the employee's fields the way the profile screen shows them."""
        data = self.to_client()
        groups = {
            "basicInfo": (
                "empCode",
                "empName",
                "designation",
                "department",
                "branch",
                "employeeType",
                "photoPath",
            ),
            "contactInfo": ("email", "mobile", "address", "city", "state", "country", "pincode"),
            "personalInfo": ("birthDate", "gender", "maritalStatus", "bloodGroup", "joiningDate"),
            "reportingInfo": ("managerName", "managerCode"),
        }
        return {group: {key: data[key] for key in keys} for group, keys in groups.items()}


class EmployeeListItemV1(UpstreamRecord):
    """Row from GetEmployeeList."""

    emp_code: str = Field("", validation_alias="ls_EmpCode")
    emp_name: str = Field("", validation_alias="ls_EmpName")
    department: str = Field("", validation_alias="ls_DeptName")
    designation: str = Field("", validation_alias="ls_Designation")
    branch: str = Field("", validation_alias="ls_BranchName")
    email: str = Field("", validation_alias="ls_Email")
    mobile: str = Field("", validation_alias="ls_Mobile")
    employee_type: str = Field("", validation_alias="ls_EmpType")
    status: Annotated[str, BeforeValidator(_or("Active"))] = Field("Active", validation_alias="ls_Status")
    joining_date: str = Field("", validation_alias="ls_JoinDate")
    manager_name: str = Field("", validation_alias="ls_ManagerName")


class EmployeeSearchResultV1(UpstreamRecord):
    """Row from SearchEmployees."""

    emp_code: str = Field("", validation_alias="ls_EmpCode")
    emp_name: str = Field("", validation_alias="ls_EmpName")
    department: str = Field("", validation_alias="ls_DeptName")
    designation: str = Field("", validation_alias="ls_Designation")
    branch: str = Field("", validation_alias="ls_BranchName")
    email: str = Field("", validation_alias="ls_Email")
    mobile: str = Field("", validation_alias="ls_Mobile")
    employee_type: str = Field("", validation_alias="ls_EmpType")
    photo_path: str = Field("", validation_alias="ls_PhotoPath")


class OrgChartMemberV1(UpstreamRecord):
    """Peer row from GetOrgChart."""

    emp_code: str = Field("", validation_alias="ls_EmpCode")
    emp_name: str = Field("", validation_alias="ls_EmpName")
    designation: str = Field("", validation_alias="ls_Designation")
    department: str = Field("", validation_alias="ls_DeptName")


class OrgChartSubordinateV1(OrgChartMemberV1):
    """Subordinate row from GetOrgChart, with contact details."""

    email: str = Field("", validation_alias="ls_Email")
    mobile: str = Field("", validation_alias="ls_Mobile")


class OrgChartManagerV1(UpstreamRecord):
    """Manager block read from the top level of a GetOrgChart reply."""

    emp_code: str = Field("", validation_alias="ls_ManagerCode")
    emp_name: str = Field("", validation_alias="ls_ManagerName")
    designation: str = Field("", validation_alias="ls_ManagerDesignation")
    department: str = Field("", validation_alias="ls_ManagerDept")


def map_records(model: type[UpstreamRecord], items: Any) -> list[dict[str, Any]]:
    """Map an upstream `lst_...` list to client dicts; non-list input maps to []."""
    if not isinstance(items, list):
        return []
    return [model.model_validate(item).to_client() for item in items if isinstance(item, dict)]
