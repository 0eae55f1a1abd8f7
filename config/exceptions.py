"""Exception handlers for the introspection service."""

from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse


def _error_response(status_code: int, message) -> JSONResponse:
    try:
        error_name = HTTPStatus(status_code).phrase
    except ValueError:
        error_name = "Error"

    return JSONResponse(
        status_code=status_code,
        content={
            "message": message,
            "statusCode": status_code,
            "error": error_name,
        },
    )


async def _http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Format HTTP errors as message/statusCode/error."""
    return _error_response(exc.status_code, exc.detail)


async def _request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Format request validation errors with one message per invalid field."""
    messages = [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    return _error_response(HTTPStatus.UNPROCESSABLE_ENTITY.value, messages)


def configure_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers for the application.

    This function registers handlers that convert application exceptions
    to appropriate HTTP responses. Add new exception handlers here as needed.
    """
    app.add_exception_handler(HTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError,
        _request_validation_exception_handler,  # type: ignore[arg-type]
    )
