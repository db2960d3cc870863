"""Upstream payload builders for HRMS BFF v1 write operations.

Client bodies arrive in upstream naming already. These builders coerce
identifiers and amounts to strings and fill the optional fields the
upstream service expects to be present.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any


def as_text(value: Any, default: str = "") -> str:
    """Render a body value the way the upstream expects: falsy becomes `default`."""
    if value is None or value == "" or value is False:
        return default
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def today_stamp(now: datetime | None = None) -> str:
    return (now or datetime.now()).strftime("%Y%m%d")


def build_leave_application(body: dict[str, Any], now: datetime | None = None) -> dict[str, str]:
    """Payload for LeavApply."""
    return {
        "ls_EmpCode": as_text(body.get("ls_EmpCode")),
        "ls_FromDate": as_text(body.get("ls_FromDate")),
        "ls_ToDate": as_text(body.get("ls_ToDate")),
        "ls_DocDate": as_text(body.get("ls_DocDate"), today_stamp(now)),
        "ls_NofDays": as_text(body.get("ls_NofDays"), "1"),
        "ls_FromTime": as_text(body.get("ls_FromTime")),
        "ls_ToTime": as_text(body.get("ls_ToTime")),
        "ls_LeavTyp": as_text(body.get("ls_LeavTyp")),
        "ls_GrpNo": as_text(body.get("ls_GrpNo")),
        "ls_Reason": as_text(body.get("ls_Reason")),
    }


def build_loan_application(body: dict[str, Any], now: datetime | None = None) -> dict[str, str]:
    """Payload for LoanApply."""
    return {
        "ls_EmpCode": as_text(body.get("ls_EmpCode")),
        "ls_LoanTyp": as_text(body.get("ls_LoanTyp")),
        "ls_ReqDate": as_text(body.get("ls_ReqDate"), today_stamp(now)),
        "ls_ReqAmnt": as_text(body.get("ls_ReqAmnt")),
        "ls_Intrst": as_text(body.get("ls_Intrst"), "0"),
        "ls_FinlAmnt": as_text(body.get("ls_FinlAmnt"), "0"),
        "ls_NoOfEmi": as_text(body.get("ls_NoOfEmi")),
        "ls_EmiAmnt": as_text(body.get("ls_EmiAmnt"), "0"),
        "ls_Reason": as_text(body.get("ls_Reason")),
    }


def build_out_duty_punch(body: dict[str, Any], now: datetime | None = None) -> dict[str, str]:
    """Payload for EmpOutDuty, stamped with the server's current date and time."""
    now = now or datetime.now()
    stamp = today_stamp(now)
    return {
        "ls_EmpCode": as_text(body.get("ls_EmpCode")),
        "ls_AttendDt": stamp,
        "ls_Date": stamp,
        "ls_Time": now.strftime("%H:%M"),
        "ls_Type": as_text(body.get("ls_Type")),
        "ls_Location": as_text(body.get("ls_Location")),
        "ls_LocManual": as_text(body.get("ls_LocManual")),
        "ls_Latitude": as_text(body.get("ls_Latitude")),
        "ls_Longitude": as_text(body.get("ls_Longitude")),
        "ls_ClientNm": as_text(body.get("ls_ClientNm")),
        "ls_ReasonVisit": as_text(body.get("ls_ReasonVisit")),
        "ls_Remark": as_text(body.get("ls_Remark")),
    }
