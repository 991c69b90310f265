"""Custom exception classes and global exception handlers."""

import logging
import traceback

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ToolboxException(Exception):
    """Base exception for all application-specific errors."""

    def __init__(self, message: str, status_code: int = 400, details: str | None = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class UnauthorizedException(ToolboxException):
    """Authentication required exception."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, 401)


class ForbiddenException(ToolboxException):
    """Access forbidden exception."""

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message, 403)


class InvalidInputException(ToolboxException):
    """Malformed, missing or out-of-range request input."""

    def __init__(self, message: str, errors: list[dict] | None = None):
        super().__init__(message, 400)
        self.errors = errors


class NotFoundException(ToolboxException):
    """Resource not found exception."""

    def __init__(self, resource: str = "Resource"):
        super().__init__(f"{resource} not found", 404)


class ConflictException(ToolboxException):
    """Resource conflict exception."""

    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message, 400)


class PersistenceException(ToolboxException):
    """The database rejected or failed an operation."""

    def __init__(self, message: str = "Database operation failed", details: str | None = None):
        super().__init__(message, 500, details)


class NotificationException(ToolboxException):
    """An outbound notification could not be delivered."""

    def __init__(self, message: str = "Failed to send email", details: str | None = None):
        super().__init__(message, 500, details)


def allowed_values_message(field: str, allowed) -> str:
    """Build the error message for a value outside its enumerated set."""
    values = [getattr(v, "value", v) for v in allowed]
    return f"{field} must be one of: {', '.join(values)}"


def create_exception_handlers():
    """Create the exception handlers registered on the application."""

    async def toolbox_exception_handler(request: Request, exc: ToolboxException):
        """Handle application exceptions."""
        logger.warning(
            f"{type(exc).__name__} on {request.method} {request.url.path}: "
            f"{exc.message} (status={exc.status_code})"
        )

        content = {"success": False, "error": exc.message}
        if exc.details:
            content["details"] = exc.details
        if getattr(exc, "errors", None):
            content["errors"] = exc.errors
        return JSONResponse(status_code=exc.status_code, content=content)

    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Report FastAPI request validation failures as invalid input."""
        errors = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
                "message": err.get("msg", "Invalid value"),
            }
            for err in exc.errors()
        ]
        logger.warning(f"Invalid input on {request.method} {request.url.path}: {errors}")

        message = "Invalid request"
        if errors:
            first = errors[0]
            message = f"{first['field']}: {first['message']}" if first["field"] else first["message"]

        return JSONResponse(
            status_code=400,
            content={"success": False, "error": message, "errors": errors},
        )

    async def generic_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.error(f"Unhandled exception on {request.method} {request.url.path}")
        logger.error(f"Exception: {type(exc).__name__}: {exc}")
        tb_lines = traceback.format_exception(type(exc), exc, exc.__traceback__)
        logger.error("".join(tb_lines))

        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "An unexpected error occurred",
            },
        )

    return {
        ToolboxException: toolbox_exception_handler,
        RequestValidationError: request_validation_handler,
        Exception: generic_exception_handler,
    }
