# teamboard/core/error_handlers.py
import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from teamboard.core.errors import AppError

logger = logging.getLogger(__name__)


def _envelope(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "status": "fail" if 400 <= status_code < 500 else "error",
            "message": message,
        },
    )


async def app_error_handler(request: Request, exc: AppError):
    return _envelope(exc.status_code, exc.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _envelope(exc.status_code, str(exc.detail))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if not errors:
        return _envelope(status.HTTP_400_BAD_REQUEST, "Invalid request.")

    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return _envelope(
        status.HTTP_400_BAD_REQUEST,
        f"Invalid input data: {field} - {message}" if field else f"Invalid input data: {message}",
    )


async def duplicate_key_handler(request: Request, exc: DuplicateKeyError):
    logger.warning("Duplicate key on %s %s: %s", request.method, request.url.path, exc)
    return _envelope(status.HTTP_400_BAD_REQUEST, "Duplicate field value. Please use another value.")


async def generic_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, "Something went wrong.")
