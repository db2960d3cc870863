"""Unit tests for attendance, out-duty and reverse-geocode routes."""

from __future__ import annotations

import json
import re
from pathlib import Path

import httpx
import pytest
from httpx import AsyncClient, Response
from respx import MockRouter

from hrms_bff_service.config import HRMSBFFSettings
from hrms_bff_service.tests.test_provider import GEOCODE_URL, UPSTREAM_BASE_URL, make_test_settings

OK_STATUS = {"ls_Status": "S", "ls_Message": "Success"}


class TestAttendance:
    @pytest.mark.asyncio
    async def test_success_maps_records_to_camel_case(
        self, client: AsyncClient, respx_mock: MockRouter
    ) -> None:
        route = respx_mock.get(f"{UPSTREAM_BASE_URL}/GetAttendanceRpt").mock(
            return_value=Response(
                200,
                json={
                    "l_ClsErrorStatus": OK_STATUS,
                    "lst_ClsAttndncRptDtls": [
                        {
                            "ls_EmpCode": "E001",
                            "ls_DayType": "P",
                            "ls_ManInTm": "09:02",
                            "ls_SysTotTm": None,
                        }
                    ],
                },
            )
        )

        response = await client.get(
            "/api/attendance", params={"ls_EmpCode": "E001", "ls_Month": "202401"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Attendance report fetched successfully"
        record = data["attendanceData"][0]
        assert record["empCode"] == "E001"
        assert record["dayType"] == "P"
        assert record["manInTime"] == "09:02"
        assert record["sysTotalTime"] == ""
        params = route.calls.last.request.url.params
        assert params["Month"] == "202401"
        assert params["EMPCode"] == "E001"

    @pytest.mark.asyncio
    @pytest.mark.respx(assert_all_called=False)
    async def test_missing_month_returns_400(
        self, client: AsyncClient, respx_mock: MockRouter
    ) -> None:
        upstream = respx_mock.route(url__startswith=UPSTREAM_BASE_URL)

        response = await client.get("/api/attendance", params={"ls_EmpCode": "E001"})

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "EMPCode and Month are required."}
        assert upstream.call_count == 0

    @pytest.mark.asyncio
    async def test_nested_failure_returns_400_with_upstream_message(
        self, client: AsyncClient, respx_mock: MockRouter
    ) -> None:
        respx_mock.get(f"{UPSTREAM_BASE_URL}/GetAttendanceRpt").mock(
            return_value=Response(
                200, json={"l_ClsErrorStatus": {"ls_Status": "E", "ls_Message": "No data"}}
            )
        )

        response = await client.get(
            "/api/attendance", params={"ls_EmpCode": "E001", "ls_Month": "202401"}
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "No data"}

    @pytest.mark.asyncio
    async def test_timeout_returns_500(self, client: AsyncClient, respx_mock: MockRouter) -> None:
        respx_mock.get(f"{UPSTREAM_BASE_URL}/GetAttendanceRpt").mock(side_effect=httpx.ReadTimeout)

        response = await client.get(
            "/api/attendance", params={"ls_EmpCode": "E001", "ls_Month": "202401"}
        )

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to fetch attendance report"


class TestMonthlyAttendance:
    @pytest.mark.asyncio
    async def test_success_defaults_total_hours(
        self, client: AsyncClient, respx_mock: MockRouter
    ) -> None:
        route = respx_mock.get(f"{UPSTREAM_BASE_URL}/GetMnthlyAttndRpt").mock(
            return_value=Response(
                200,
                json={
                    "l_ClsErrorStatus": OK_STATUS,
                    "lst_ClsMnthlyAttndncRptDtls": [
                        {"ls_WorkDate": "01-01-2024", "ls_Tothrs": ""},
                        {"ls_WorkDate": "02-01-2024", "ls_Tothrs": "8.5"},
                    ],
                },
            )
        )

        response = await client.get(
            "/api/monthly-attendance",
            params={"ls_FromDate": "20240101", "ls_ToDate": "20240131", "ls_EmpCode": "E001"},
        )

        assert response.status_code == 200
        records = response.json()["attendanceData"]
        assert [r["totalHours"] for r in records] == ["0", "8.5"]
        params = route.calls.last.request.url.params
        assert (params["FromDate"], params["ToDate"], params["EMPCode"]) == (
            "20240101",
            "20240131",
            "E001",
        )

    @pytest.mark.asyncio
    @pytest.mark.respx(assert_all_called=False)
    async def test_missing_range_returns_400(
        self, client: AsyncClient, respx_mock: MockRouter
    ) -> None:
        upstream = respx_mock.route(url__startswith=UPSTREAM_BASE_URL)

        response = await client.get("/api/monthly-attendance", params={"ls_EmpCode": "E001"})

        assert response.status_code == 400
        assert response.json()["message"] == "FromDate, ToDate, and EMPCode are required."
        assert upstream.call_count == 0


class TestOutDuty:
    BODY = {
        "ls_EmpCode": "E001",
        "ls_Type": "I",
        "ls_Latitude": 12.9716,
        "ls_Longitude": 77.5946,
        "ls_Location": "Client office",
    }

    @pytest.mark.asyncio
    async def test_check_in_stamps_server_time(
        self, client: AsyncClient, respx_mock: MockRouter
    ) -> None:
        route = respx_mock.post(f"{UPSTREAM_BASE_URL}/EmpOutDuty").mock(
            return_value=Response(200, json={"ls_Status": "S"})
        )

        response = await client.post("/api/out-duty", json=self.BODY)

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Check-in recorded successfully",
            "data": {"ls_Status": "S"},
        }
        payload = json.loads(route.calls.last.request.content)
        assert re.fullmatch(r"\d{8}", payload["ls_Date"])
        assert payload["ls_AttendDt"] == payload["ls_Date"]
        assert re.fullmatch(r"\d{2}:\d{2}", payload["ls_Time"])
        assert payload["ls_Latitude"] == "12.9716"
        assert payload["ls_Location"] == "Client office"
        assert payload["ls_Remark"] == ""

    @pytest.mark.asyncio
    async def test_check_out_message(self, client: AsyncClient, respx_mock: MockRouter) -> None:
        respx_mock.post(f"{UPSTREAM_BASE_URL}/EmpOutDuty").mock(
            return_value=Response(200, json={"ls_Status": "S"})
        )

        response = await client.post("/api/out-duty", json={**self.BODY, "ls_Type": "O"})

        assert response.json()["message"] == "Check-out recorded successfully"

    @pytest.mark.asyncio
    @pytest.mark.respx(assert_all_called=False)
    async def test_missing_coordinates_return_400(
        self, client: AsyncClient, respx_mock: MockRouter
    ) -> None:
        upstream = respx_mock.route(url__startswith=UPSTREAM_BASE_URL)

        response = await client.post(
            "/api/out-duty", json={"ls_EmpCode": "E001", "ls_Type": "I"}
        )

        assert response.status_code == 400
        assert response.json()["message"] == (
            "Employee code, type, latitude, and longitude are required"
        )
        assert upstream.call_count == 0

    @pytest.mark.asyncio
    @pytest.mark.respx(assert_all_called=False)
    @pytest.mark.parametrize("punch_type", ["X", "in", ["I"]])
    async def test_invalid_type_returns_400(
        self, client: AsyncClient, respx_mock: MockRouter, punch_type: object
    ) -> None:
        upstream = respx_mock.route(url__startswith=UPSTREAM_BASE_URL)

        response = await client.post("/api/out-duty", json={**self.BODY, "ls_Type": punch_type})

        assert response.status_code == 400
        assert response.json()["message"] == "Type must be 'I' for In or 'O' for Out"
        assert upstream.call_count == 0

    @pytest.mark.asyncio
    async def test_upstream_rejection_returns_400(
        self, client: AsyncClient, respx_mock: MockRouter
    ) -> None:
        respx_mock.post(f"{UPSTREAM_BASE_URL}/EmpOutDuty").mock(
            return_value=Response(200, json={"ls_Status": "E"})
        )

        response = await client.post("/api/out-duty", json=self.BODY)

        assert response.status_code == 400
        assert response.json()["message"] == "Failed to record check-in"


class TestOutDutyLists:
    @pytest.mark.asyncio
    async def test_latest_out_duty_found(self, client: AsyncClient, respx_mock: MockRouter) -> None:
        rows = [{"ls_Type": "I", "ls_Time": "10:15"}]
        route = respx_mock.get(f"{UPSTREAM_BASE_URL}/GetLatestOutDuty").mock(
            return_value=Response(200, json={"lst_ClsLatestOutDutyDtls": rows})
        )

        response = await client.get(
            "/api/latest-out-duty", params={"empCode": "E001", "date": "20240105"}
        )

        assert response.json() == {
            "success": True,
            "message": "Latest out-duty data fetched successfully",
            "data": rows,
        }
        params = route.calls.last.request.url.params
        assert (params["EmpCode"], params["Date"]) == ("E001", "20240105")

    @pytest.mark.asyncio
    async def test_latest_out_duty_absent_list_is_empty_success(
        self, client: AsyncClient, respx_mock: MockRouter
    ) -> None:
        respx_mock.get(f"{UPSTREAM_BASE_URL}/GetLatestOutDuty").mock(
            return_value=Response(200, json={"l_ClsErrorStatus": {"ls_Status": "E"}})
        )

        response = await client.get(
            "/api/latest-out-duty", params={"empCode": "E001", "date": "20240105"}
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "No out-duty data found", "data": []}

    @pytest.mark.asyncio
    async def test_history_found(self, client: AsyncClient, respx_mock: MockRouter) -> None:
        respx_mock.get(f"{UPSTREAM_BASE_URL}/GetOutDuty").mock(
            return_value=Response(200, json={"lst_ClsOutDutyDtls": []})
        )

        response = await client.get(
            "/api/out-duty-history", params={"empCode": "E001", "date": "20240105"}
        )

        assert response.json()["message"] == "Out-duty history fetched successfully"
        assert response.json()["data"] == []

    @pytest.mark.asyncio
    async def test_history_absent(self, client: AsyncClient, respx_mock: MockRouter) -> None:
        respx_mock.get(f"{UPSTREAM_BASE_URL}/GetOutDuty").mock(return_value=Response(200, json={}))

        response = await client.get(
            "/api/out-duty-history", params={"empCode": "E001", "date": "20240105"}
        )

        assert response.json()["message"] == "No out-duty history found"

    @pytest.mark.asyncio
    @pytest.mark.respx(assert_all_called=False)
    async def test_missing_date_returns_400(
        self, client: AsyncClient, respx_mock: MockRouter
    ) -> None:
        upstream = respx_mock.route(url__startswith=UPSTREAM_BASE_URL)

        response = await client.get("/api/out-duty-history", params={"empCode": "E001"})

        assert response.status_code == 400
        assert response.json()["message"] == "Employee code and date are required"
        assert upstream.call_count == 0

    @pytest.mark.asyncio
    async def test_connection_failure_returns_500(
        self, client: AsyncClient, respx_mock: MockRouter
    ) -> None:
        respx_mock.get(f"{UPSTREAM_BASE_URL}/GetOutDuty").mock(side_effect=httpx.ConnectError)

        response = await client.get(
            "/api/out-duty-history", params={"empCode": "E001", "date": "20240105"}
        )

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to fetch out-duty history"


class TestReverseGeocode:
    GEOCODE_REPLY = {
        "status": "OK",
        "results": [
            {
                "formatted_address": "Tech Park, MG Road, Bengaluru, Karnataka 560001, India",
                "address_components": [
                    {"long_name": "Tech Park", "types": ["establishment"]},
                ],
            }
        ],
    }

    @pytest.mark.asyncio
    async def test_success_returns_short_and_full_address(
        self, client: AsyncClient, respx_mock: MockRouter
    ) -> None:
        route = respx_mock.get(GEOCODE_URL).mock(return_value=Response(200, json=self.GEOCODE_REPLY))

        response = await client.post(
            "/api/reverse-geocode", json={"latitude": 12.97, "longitude": 77.59}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Address fetched successfully"
        assert data["address"] == "Tech Park,  Karnataka 560001, India"
        assert data["fullAddress"] == "Tech Park, MG Road, Bengaluru, Karnataka 560001, India"
        assert data["data"] == self.GEOCODE_REPLY["results"][0]
        params = route.calls.last.request.url.params
        assert params["latlng"] == "12.97,77.59"
        assert params["key"] == "test-maps-key"

    @pytest.mark.asyncio
    @pytest.mark.respx(assert_all_called=False)
    async def test_missing_coordinates_return_400(
        self, client: AsyncClient, respx_mock: MockRouter
    ) -> None:
        geocoder = respx_mock.get(GEOCODE_URL)

        response = await client.post("/api/reverse-geocode", json={"latitude": 12.97})

        assert response.status_code == 400
        assert response.json()["message"] == "Latitude and longitude are required"
        assert geocoder.call_count == 0

    @pytest.mark.asyncio
    async def test_zero_results_returns_400(
        self, client: AsyncClient, respx_mock: MockRouter
    ) -> None:
        respx_mock.get(GEOCODE_URL).mock(
            return_value=Response(200, json={"status": "ZERO_RESULTS", "results": []})
        )

        response = await client.post(
            "/api/reverse-geocode", json={"latitude": 12.97, "longitude": 77.59}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Unable to fetch location name from Google Maps API"

    @pytest.mark.asyncio
    async def test_provider_failure_returns_500(
        self, client: AsyncClient, respx_mock: MockRouter
    ) -> None:
        respx_mock.get(GEOCODE_URL).mock(side_effect=httpx.ConnectError)

        response = await client.post(
            "/api/reverse-geocode", json={"latitude": 12.97, "longitude": 77.59}
        )

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to fetch address"


class TestReverseGeocodeWithoutKey:
    @pytest.fixture
    def test_settings(self, tmp_path: Path) -> HRMSBFFSettings:
        return make_test_settings(upload_dir=tmp_path / "allowance", GOOGLE_MAPS_API_KEY=None)

    @pytest.mark.asyncio
    async def test_missing_api_key_returns_500(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/reverse-geocode", json={"latitude": 12.97, "longitude": 77.59}
        )

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Google Maps API key not configured"}
