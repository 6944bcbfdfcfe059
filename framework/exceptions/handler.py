from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError
from framework.logging.logger import get_logger
from framework.response import ResponseModel
from typing import Any

logger = get_logger("exception_handler")

class BusinessException(Exception):
    """Base class for business exceptions; carries the HTTP status returned to the client."""
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, status_code: int = None, detail: Any = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.detail = detail

class ValidationError(BusinessException):
    """Client-fixable input problem (missing or invalid field)."""
    status_code = status.HTTP_400_BAD_REQUEST

class UnauthorizedError(BusinessException):
    status_code = status.HTTP_401_UNAUTHORIZED

class ForbiddenError(BusinessException):
    """Role check failed."""
    status_code = status.HTTP_403_FORBIDDEN

class NotFoundError(BusinessException):
    """Record absent, or owned by another user (indistinguishable on purpose)."""
    status_code = status.HTTP_404_NOT_FOUND

class RateLimitExceeded(BusinessException):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS


def _format_validation_errors(errors) -> str:
    first = errors[0] if errors else {}
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    field = ".".join(loc)
    msg = first.get("msg", "Invalid request parameters")
    return f"{field}: {msg}" if field else msg


def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    trace_id = getattr(request.state, "trace_id", "unknown")

    if isinstance(exc, BusinessException):
        logger.warning(f"Trace[{trace_id}] - {type(exc).__name__}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=ResponseModel.fail(message=exc.message, data=exc.detail)
        )

    if isinstance(exc, RequestValidationError):
        errors = exc.errors()
        logger.warning(f"Trace[{trace_id}] - RequestValidationError: {errors}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ResponseModel.fail(
                message=_format_validation_errors(errors),
                data={"errors": [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in errors]}
            )
        )

    if isinstance(exc, StarletteHTTPException):
        logger.warning(f"Trace[{trace_id}] - HTTPException {exc.status_code}: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content=ResponseModel.fail(message=str(exc.detail)),
            headers=getattr(exc, "headers", None)
        )

    if isinstance(exc, SQLAlchemyError):
        logger.opt(exception=exc).critical(f"Trace[{trace_id}] - DatabaseError: {str(exc)}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ResponseModel.fail(message="Server error")
        )

    logger.opt(exception=exc).error(f"Trace[{trace_id}] - UncaughtException: {str(exc)}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ResponseModel.fail(message="Server error")
    )
