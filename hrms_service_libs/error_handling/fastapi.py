"""FastAPI integration: render every failure as the `{success, message}` envelope."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from hrms_service_libs.error_handling.hrms_error import HrmsError
from hrms_service_libs.logging_utils import create_service_logger

logger = create_service_logger("error_handling.fastapi")


def register_error_handlers(app: FastAPI, *, expose_error_details: bool = True) -> None:
    """Register HrmsError, request validation and catch-all handlers on `app`.

    Args:
        app: The FastAPI application
        expose_error_details: Include raw upstream error text under `error`
    """

    @app.exception_handler(HrmsError)
    async def handle_hrms_error(request: Request, exc: HrmsError) -> JSONResponse:
        log = logger.warning if exc.status_code < 500 else logger.error
        log(
            "Request failed",
            error_code=exc.error_code,
            status_code=exc.status_code,
            operation=exc.operation,
            message=exc.message,
            path=request.url.path,
            correlation_id=exc.correlation_id,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_envelope(include_error=expose_error_details),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        logger.warning("Malformed request", path=request.url.path, errors=str(errors))
        fields = [".".join(str(loc) for loc in e["loc"] if loc != "body") for e in errors]
        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "message": f"Invalid request data: {', '.join(f for f in fields if f)}"
                if any(fields)
                else "Invalid request data",
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled exception", path=request.url.path, exc_info=exc)
        content = {"success": False, "message": "Something went wrong!"}
        if expose_error_details:
            content["error"] = str(exc)
        return JSONResponse(status_code=500, content=content)
