"""Unit tests for authentication routes."""

from __future__ import annotations

import json

import httpx
import pytest
from httpx import AsyncClient, Response
from respx import MockRouter

from hrms_bff_service.tests.test_provider import UPSTREAM_BASE_URL

EMPLOYEE_DETAIL = {
    "ls_EMPNAME": "Asha Rao",
    "ls_DEPT": "Finance",
    "ls_BPLID": "3",
    "l_ClsErrorStatus": {"ls_Status": "S"},
}


class TestLogin:
    @pytest.mark.asyncio
    async def test_success_returns_employee_detail(
        self, client: AsyncClient, respx_mock: MockRouter
    ) -> None:
        login_route = respx_mock.post(f"{UPSTREAM_BASE_URL}/EmpLogin").mock(
            return_value=Response(200, json={"ls_Status": "S", "ls_Message": "Valid"})
        )
        detail_route = respx_mock.get(f"{UPSTREAM_BASE_URL}/GetEmpDetail").mock(
            return_value=Response(200, json=EMPLOYEE_DETAIL)
        )

        response = await client.post(
            "/api/login", json={"ls_EmpCode": "E001", "ls_Password": "secret"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Login successful"
        assert data["data"]["ls_EMPNAME"] == "Asha Rao"
        assert data["data"]["ls_EMPCODE"] == "E001"
        assert json.loads(login_route.calls.last.request.content) == {
            "ls_EmpCode": "E001",
            "ls_Password": "secret",
        }
        assert detail_route.calls.last.request.url.params["EmpCode"] == "E001"

    @pytest.mark.asyncio
    @pytest.mark.respx(assert_all_called=False)
    @pytest.mark.parametrize(
        "body",
        [{}, {"ls_EmpCode": "E001"}, {"ls_EmpCode": "", "ls_Password": "secret"}],
    )
    async def test_missing_credentials_returns_400(
        self, client: AsyncClient, respx_mock: MockRouter, body: dict
    ) -> None:
        upstream = respx_mock.route(url__startswith=UPSTREAM_BASE_URL)

        response = await client.post("/api/login", json=body)

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "Employee code and password are required",
        }
        assert upstream.call_count == 0

    @pytest.mark.asyncio
    @pytest.mark.respx(assert_all_called=False)
    async def test_rejected_credentials_return_401_without_detail_lookup(
        self, client: AsyncClient, respx_mock: MockRouter
    ) -> None:
        respx_mock.post(f"{UPSTREAM_BASE_URL}/EmpLogin").mock(
            return_value=Response(200, json={"ls_Status": "E", "ls_Message": "Invalid password"})
        )
        detail_route = respx_mock.get(f"{UPSTREAM_BASE_URL}/GetEmpDetail")

        response = await client.post(
            "/api/login", json={"ls_EmpCode": "E001", "ls_Password": "wrong"}
        )

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Invalid password"}
        assert detail_route.call_count == 0

    @pytest.mark.asyncio
    async def test_rejected_without_message_uses_default(
        self, client: AsyncClient, respx_mock: MockRouter
    ) -> None:
        respx_mock.post(f"{UPSTREAM_BASE_URL}/EmpLogin").mock(
            return_value=Response(200, json={"ls_Status": "E"})
        )

        response = await client.post(
            "/api/login", json={"ls_EmpCode": "E001", "ls_Password": "wrong"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Authentication failed"

    @pytest.mark.asyncio
    async def test_upstream_error_status_is_propagated(
        self, client: AsyncClient, respx_mock: MockRouter
    ) -> None:
        respx_mock.post(f"{UPSTREAM_BASE_URL}/EmpLogin").mock(
            return_value=Response(503, json={"ls_Message": "Service paused"})
        )

        response = await client.post(
            "/api/login", json={"ls_EmpCode": "E001", "ls_Password": "secret"}
        )

        assert response.status_code == 503
        data = response.json()
        assert data["success"] is False
        assert data["message"] == "Service paused"
        assert "error" in data

    @pytest.mark.asyncio
    async def test_timeout_returns_500_with_default_message(
        self, client: AsyncClient, respx_mock: MockRouter
    ) -> None:
        respx_mock.post(f"{UPSTREAM_BASE_URL}/EmpLogin").mock(side_effect=httpx.ReadTimeout)

        response = await client.post(
            "/api/login", json={"ls_EmpCode": "E001", "ls_Password": "secret"}
        )

        assert response.status_code == 500
        assert response.json()["message"] == "Login failed"


class TestChangePassword:
    BODY = {"ls_EmpCode": "E001", "ls_OldPassword": "old", "ls_NewPassword": "new"}

    @pytest.mark.asyncio
    async def test_success_forwards_all_fields(
        self, client: AsyncClient, respx_mock: MockRouter
    ) -> None:
        route = respx_mock.post(f"{UPSTREAM_BASE_URL}/EmpPswdChang").mock(
            return_value=Response(200, json={"ls_Status": "S", "ls_Message": "Password updated"})
        )

        response = await client.post("/api/change-password", json=self.BODY)

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Password updated"}
        assert json.loads(route.calls.last.request.content) == self.BODY

    @pytest.mark.asyncio
    async def test_success_without_message_uses_default(
        self, client: AsyncClient, respx_mock: MockRouter
    ) -> None:
        respx_mock.post(f"{UPSTREAM_BASE_URL}/EmpPswdChang").mock(
            return_value=Response(200, json={"ls_Status": "S"})
        )

        response = await client.post("/api/change-password", json=self.BODY)

        assert response.json()["message"] == "Password changed successfully"

    @pytest.mark.asyncio
    @pytest.mark.respx(assert_all_called=False)
    async def test_missing_field_returns_400(
        self, client: AsyncClient, respx_mock: MockRouter
    ) -> None:
        upstream = respx_mock.route(url__startswith=UPSTREAM_BASE_URL)

        response = await client.post(
            "/api/change-password", json={"ls_EmpCode": "E001", "ls_OldPassword": "old"}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "All password fields are required"
        assert upstream.call_count == 0

    @pytest.mark.asyncio
    async def test_upstream_rejection_returns_400(
        self, client: AsyncClient, respx_mock: MockRouter
    ) -> None:
        respx_mock.post(f"{UPSTREAM_BASE_URL}/EmpPswdChang").mock(
            return_value=Response(200, json={"ls_Status": "E", "ls_Message": "Old password is wrong"})
        )

        response = await client.post("/api/change-password", json=self.BODY)

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Old password is wrong"}
