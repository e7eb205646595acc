"""Error rendering for the hostel API.

Every failure leaves the API as::

    {"success": false, "message": "<text for the user>", "code": "<ERROR_CODE>"}

Classified ``DomainException``s answer 400 unless their code is listed in
``ERROR_CODE_TO_STATUS``. The session check raises plain ``HTTPException``
(401), malformed JSON becomes 400, and anything else is a logged 500 with a
generic message.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from hostel.domain.shared.exceptions import DomainException, ErrorCode

logger = logging.getLogger(__name__)

# Codes that do not answer 400
ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    ErrorCode.ENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ACCOUNT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.EMAIL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_HTTP_STATUS_TO_CODE: dict[int, str] = {
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_403_FORBIDDEN: "FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}


def status_for(code: ErrorCode) -> int:
    return ERROR_CODE_TO_STATUS.get(code, status.HTTP_400_BAD_REQUEST)


def error_response(
    status_code: int,
    message: str,
    code: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "code": code},
        headers=headers,
    )


async def handle_domain_exception(request: Request, exc: DomainException) -> JSONResponse:
    status_code = status_for(exc.code)
    level = logging.ERROR if status_code >= 500 else logging.WARNING
    logger.log(
        level,
        "%s %s -> %d %s: %s %s",
        request.method,
        request.url.path,
        status_code,
        exc.code.value,
        exc.message,
        exc.details or "",
    )
    return error_response(status_code, exc.message, exc.code.value)


async def handle_http_exception(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    logger.debug(
        "%s %s -> %d: %s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.detail,
    )
    return error_response(
        exc.status_code,
        str(exc.detail),
        _HTTP_STATUS_TO_CODE.get(exc.status_code, "HTTP_ERROR"),
        headers=getattr(exc, "headers", None),
    )


async def handle_request_validation(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    logger.warning(
        "%s %s -> malformed body: %s",
        request.method,
        request.url.path,
        exc.errors(),
    )
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "Invalid request body.",
        ErrorCode.BAD_REQUEST.value,
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback, tell the client nothing specific."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An internal error occurred",
        ErrorCode.INTERNAL_ERROR.value,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, handle_domain_exception)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)
