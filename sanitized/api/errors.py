"""
FastAPI exception handling for sanitize pipeline failures.
Messages are surfaced verbatim; they are client-safe by construction.
"""
import uuid

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from sanitized.core.logging import get_safe_logger
from sanitized.schemas.response import ErrorDetail, ErrorResponse, ResponseMetadata
from sanitized.services.exceptions import SanitizeError

logger = get_safe_logger(__name__)


def get_request_id(request: Request) -> str:
    """Use the caller's X-Request-ID or mint one."""
    return request.headers.get("X-Request-ID") or str(uuid.uuid4())


def build_error_response(exc: SanitizeError, request_id: str) -> ErrorResponse:
    return ErrorResponse(
        success=False,
        error=ErrorDetail(
            code=exc.error_code.value,
            message=exc.message,
            retryable=exc.retryable
        ),
        metadata=ResponseMetadata(requestId=request_id)
    )


async def sanitize_error_handler(
    request: Request,
    exc: SanitizeError
) -> JSONResponse:
    """Render a SanitizeError as the standard error envelope."""
    request_id = get_request_id(request)

    logger.info(
        "Request rejected",
        error_code=exc.error_code.value,
        status_code=exc.status_code,
        request_id=request_id,
        method=request.method,
        path=request.url.path
    )

    error_response = build_error_response(exc, request_id)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response.model_dump(by_alias=True),
        headers={"X-Request-ID": request_id}
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the SanitizeError handler on an application."""
    app.add_exception_handler(SanitizeError, sanitize_error_handler)
