import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_404_NOT_FOUND,
    HTTP_405_METHOD_NOT_ALLOWED,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

logger = logging.getLogger(__name__)

ERROR_STATUSES = (HTTP_400_BAD_REQUEST, HTTP_401_UNAUTHORIZED, HTTP_404_NOT_FOUND, HTTP_500_INTERNAL_SERVER_ERROR)


def error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def _public_status(status_code: int) -> int:
    if status_code in ERROR_STATUSES:
        return status_code
    # unsupported method on a known path reads as "no such endpoint"
    if status_code == HTTP_405_METHOD_NOT_ALLOWED:
        return HTTP_404_NOT_FOUND
    return HTTP_400_BAD_REQUEST if status_code < 500 else HTTP_500_INTERNAL_SERVER_ERROR


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    msg = first.get("msg", "invalid value")
    return f"{loc}: {msg}" if loc else msg


def register_exception_handlers(app: FastAPI) -> None:
    """
    Every error leaves the API as {"error": "..."} with one of ERROR_STATUSES;
    validation errors are 400.
    """

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        status_code = _public_status(exc.status_code)
        if status_code == exc.status_code:
            return error_response(status_code, str(exc.detail), headers=getattr(exc, "headers", None))
        logger.info("%s %s: %s answered as %s", request.method, request.url.path, exc.status_code, status_code)
        message = "Not Found" if status_code == HTTP_404_NOT_FOUND else str(exc.detail)
        return error_response(status_code, message)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        message = _validation_message(exc)
        logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
        return error_response(HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
