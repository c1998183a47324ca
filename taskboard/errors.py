import logging
from typing import Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base class for errors that terminate a request with a fixed status."""

    status_code = 400
    detail = "Bad request"
    headers: Optional[Dict[str, str]] = None

    def __init__(self, detail: Optional[str] = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class ValidationError(APIError):
    detail = "Invalid request body"


class DuplicateEmail(APIError):
    detail = "Email already registered"


class InvalidCredentials(APIError):
    # Same message for unknown email and wrong password.
    detail = "Invalid email or password"


class MissingToken(APIError):
    status_code = 401
    detail = "Access denied. No token provided."
    headers = {"WWW-Authenticate": "Bearer"}


class InvalidToken(APIError):
    detail = "Invalid token."


class NotFound(APIError):
    status_code = 404
    detail = "Task not found"


def first_error_message(exc: RequestValidationError) -> str:
    """Reduce a pydantic error list to the message of its first entry."""
    errors = exc.errors()
    if not errors:
        return ValidationError.detail

    error = errors[0]
    # Drop the "body"/"query"/"path" prefix from the location.
    field = ".".join(str(part) for part in error.get("loc", ())[1:])
    message = error.get("msg", ValidationError.detail)
    return f"{field}: {message}" if field else message


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=exc.headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return await api_error_handler(request, ValidationError(first_error_message(exc)))


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
