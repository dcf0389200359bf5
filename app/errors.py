# app/errors.py

"""
Domain exceptions and the handlers that turn them into HTTP responses.

Every response uses FastAPI's ``{"detail": ...}`` body shape.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code = 400
    default_detail = "Invalid request"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class InvalidRequest(ApiError):
    status_code = 400
    default_detail = "Invalid request"


class NotFound(ApiError):
    status_code = 404
    default_detail = "Not found"


class SlotAlreadyBooked(ApiError):
    status_code = 409
    default_detail = "That time slot is already booked"


def _field_name(loc) -> str:
    names = [str(part) for part in loc if part not in ("body", "query", "path", "header")]
    return names[-1] if names else "body"


def describe_validation_errors(errors) -> str:
    missing = [_field_name(e["loc"]) for e in errors if e["type"] == "missing"]
    if missing:
        return "Missing required fields: " + ", ".join(missing)

    first = errors[0]
    msg = first["msg"]
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    return f"Invalid '{_field_name(first['loc'])}': {msg}"


async def api_error_handler(request: Request, exc: ApiError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": describe_validation_errors(exc.errors())})


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "server error"})


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
