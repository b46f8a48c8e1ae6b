"""Error Handlers — turn raised errors into the API's JSON error envelope.

Invariants:
    - DashboardError → its own http_status and to_response() envelope
    - RequestValidationError (malformed query/path/body) → 400 with per-field details
    - Anything else → 500 with a fixed message; the traceback goes to the log only
    - Log level follows error severity: CRITICAL/ERROR log as errors, the rest as warnings

Design Decisions:
    - Invoice form mistakes never reach these handlers: they come back from the
      mutation pipeline as FormState bodies
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from dashboard.core.errors import DashboardError, ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)

_LOG_LEVEL_BY_SEVERITY = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.ERROR,
}


async def handle_dashboard_error(request: Request, exc: DashboardError) -> JSONResponse:
    level = logging.WARNING if exc.http_status < 500 else _LOG_LEVEL_BY_SEVERITY[exc.severity]
    logger.log(
        level, f"{exc.code}: {exc.message}",
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_request_validation(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(part) for part in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    logger.warning(
        f"Rejected request: {len(details)} invalid field(s)",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request data",
                "category": ErrorCategory.VALIDATION.value,
                "severity": ErrorSeverity.ERROR.value,
                "details": details,
            },
        },
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    envelope = DashboardError("An unexpected error occurred").to_response()
    envelope["error"]["severity"] = ErrorSeverity.CRITICAL.value
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=envelope,
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DashboardError, handle_dashboard_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)
