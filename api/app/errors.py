"""
Error taxonomy and FastAPI exception handlers.

Client-caused errors (validation, not found, unauthorized) are returned with
descriptive bodies. Everything else is logged server-side with full detail
and surfaced as a plain-text "Server Error".
"""

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from app.logging import get_logger

logger = get_logger("app.errors")

SERVER_ERROR_MESSAGE = "Server Error"


class AppError(Exception):
    """Base class for errors with a client-visible response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, msg: str = SERVER_ERROR_MESSAGE):
        super().__init__(msg)
        self.msg = msg

    def to_content(self) -> dict[str, Any]:
        return {"msg": self.msg}


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED


class NotFound(AppError):
    """Owner, profile or external account is absent."""

    status_code = status.HTTP_400_BAD_REQUEST


class ValidationFailed(AppError):
    """One or more request fields failed validation; every failure is listed."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: list[dict[str, Any]]):
        super().__init__("Validation failed")
        self.errors = errors

    def to_content(self) -> dict[str, Any]:
        return {"errors": self.errors}


class UpstreamFailure(AppError):
    """An outbound call to an external service failed."""


class StoreFault(AppError):
    """Unexpected persistence-layer error."""


def field_error(param: str, msg: str, value: Any = None, location: str = "body") -> dict[str, Any]:
    """Build a single entry of the validation ``errors`` list."""
    return {"msg": msg, "param": param, "location": location, "value": value}


def _request_validation_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        location = loc[0] if loc else "body"
        param = ".".join(loc[1:]) if len(loc) > 1 else location
        value = error.get("input")
        if not isinstance(value, (str, int, float, bool, type(None))):
            value = None
        errors.append(field_error(param, error.get("msg", "Invalid value"), value, location))
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(
                "server_error",
                error=str(exc),
                error_type=type(exc).__name__,
                path=request.url.path,
            )
            return PlainTextResponse(SERVER_ERROR_MESSAGE, status_code=exc.status_code)

        logger.info(
            "client_error",
            error_type=type(exc).__name__,
            status_code=exc.status_code,
            path=request.url.path,
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = _request_validation_errors(exc)
        logger.info("request_validation_error", errors=errors, path=request.url.path)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"errors": errors},
        )

    @app.exception_handler(SQLAlchemyError)
    async def store_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.exception(
            "store_fault",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        return PlainTextResponse(
            SERVER_ERROR_MESSAGE,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        return PlainTextResponse(
            SERVER_ERROR_MESSAGE,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
