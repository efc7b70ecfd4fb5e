"""
Standardized error handling for API

Every failure response has the shape {error, message, code}, where error is
the category label and code a stable token.
"""

import logging
from enum import Enum
from functools import wraps
from typing import Callable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from quaycheck.api.cancellation import ClientDisconnected
from quaycheck.core.exceptions import UpstreamError, ValidationError
from quaycheck.docker.classifier import ClassifiedError
from quaycheck.docker.exceptions import ErrorCategory

logger = logging.getLogger(__name__)

# Non-standard status used by nginx for "client closed request"
CLIENT_CLOSED_REQUEST = 499

# Failures outside the Docker taxonomy, e.g. a bug in response rendering
INTERNAL_ERROR_CODE = "internal_error"


class ErrorLabel(str, Enum):
    """Error labels that are not upstream categories"""

    VALIDATION = "validation"
    CLIENT_CLOSED = "client_closed"


class ErrorResponse(BaseModel):
    """Standard error response format"""

    error: str
    message: str
    code: str


def error_response(error: str, message: str, code: str, status_code: int) -> JSONResponse:
    """
    Build a standardized JSON error response

    Args:
        error: Category label (e.g., "unavailable", "validation")
        message: Human-readable error message
        code: Stable machine-readable token
        status_code: HTTP status code

    Example:
        return error_response("validation", "Missing port parameter", "missing_param", 400)
    """
    body = ErrorResponse(error=error, message=message, code=code)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def classified_response(classified: ClassifiedError) -> JSONResponse:
    """Render a classified Docker failure"""
    return error_response(
        classified.category.value,
        classified.message,
        classified.code,
        classified.status_code,
    )


async def _validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info(f"{request.url.path} - {exc.code}: {exc.message}")
    return error_response(ErrorLabel.VALIDATION.value, exc.message, exc.code, 400)


async def _upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
    return classified_response(exc.classified)


async def _client_disconnected_handler(request: Request, exc: ClientDisconnected) -> JSONResponse:
    logger.info(f"{request.url.path} - client disconnected, query cancelled")
    return error_response(
        ErrorLabel.CLIENT_CLOSED.value,
        "Client closed the request",
        "client_closed_request",
        CLIENT_CLOSED_REQUEST,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers that render domain exceptions as ErrorResponse"""
    app.add_exception_handler(ValidationError, _validation_error_handler)
    app.add_exception_handler(UpstreamError, _upstream_error_handler)
    app.add_exception_handler(ClientDisconnected, _client_disconnected_handler)


def api_exception_handler(operation: str):
    """
    Decorator for consistent error handling in API routes

    Domain exceptions pass through to the registered handlers; anything else
    is logged with a traceback and rendered as an unknown error. Exception
    text stays in the log and is never sent to the caller.

    Args:
        operation: Description of the operation for logging

    Example:
        @router.get("/check")
        @api_exception_handler("check_port")
        async def check(...):
            ...
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except (ValidationError, UpstreamError, ClientDisconnected):
                raise
            except Exception as e:
                logger.exception(f"{operation} failed: {e}")
                return error_response(
                    ErrorCategory.UNKNOWN.value,
                    f"Unexpected error in {operation}",
                    INTERNAL_ERROR_CODE,
                    500,
                )

        return wrapper

    return decorator
