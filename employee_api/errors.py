# errors.py
import logging
from enum import Enum
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    DUPLICATE_KEY = "duplicate_key"
    NOT_FOUND = "not_found"
    BAD_REQUEST = "bad_request"
    SERVER = "server"


ERROR_STATUS = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.DUPLICATE_KEY: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.SERVER: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class EmployeeAPIError(Exception):
    """An error with a user-facing message and an optional underlying cause."""

    def __init__(self, kind: ErrorKind, message: str, error: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.error = error

    @property
    def status_code(self) -> int:
        return ERROR_STATUS[self.kind]

    def to_response(self) -> dict:
        content = {"message": self.message}
        if self.error is not None:
            content["error"] = self.error
        return content


def format_validation_errors(errors) -> str:
    """Flattens pydantic error dicts into 'field: message; ...'."""
    return "; ".join(
        f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}" for e in errors
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register the error translation handlers on the FastAPI app."""

    @app.exception_handler(EmployeeAPIError)
    async def employee_api_error_handler(request: Request, exc: EmployeeAPIError):
        log = logger.error if exc.kind is ErrorKind.SERVER else logger.warning
        log(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message} ({exc.error})")
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=ERROR_STATUS[ErrorKind.VALIDATION],
            content={
                "message": "Invalid request data",
                "error": format_validation_errors(exc.errors()),
            },
        )
