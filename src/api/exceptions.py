"""
Custom exceptions and error handlers for the Picverter API.
Provides consistent error handling across all endpoints.
"""

import asyncio
import logging
import traceback
from functools import wraps
from typing import Dict, Optional

from fastapi import HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


# Custom exception classes
class PicverterException(Exception):
    """Base exception for Picverter."""

    def __init__(self, message: str, status_code: int = 500, details: Optional[Dict] = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class DecodeError(PicverterException):
    """Exception raised when the source cannot be read or is not an image."""

    def __init__(self, source: str, reason: str, status_code: int = 400):
        super().__init__(
            message=f"Failed to open image: {reason}",
            status_code=status_code,
            details={"source": source, "reason": reason},
        )


class InvalidCropError(PicverterException):
    """Exception raised when the crop rectangle does not fit the image."""

    def __init__(self, crop: Dict, reason: str):
        super().__init__(
            message=f"Invalid crop: {reason}",
            status_code=400,
            details={"crop": crop, "reason": reason},
        )


class UnsupportedFormatError(PicverterException):
    """Exception raised when the requested output format has no encoder."""

    def __init__(self, format_tag: str, supported: Optional[list] = None):
        super().__init__(
            message=f"Unsupported format: {format_tag}",
            status_code=400,
            details={"format": format_tag, "supported": supported or []},
        )


class WriteError(PicverterException):
    """Exception raised when the output file cannot be written."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            message=f"Failed to save image: {reason}",
            status_code=507,  # Insufficient Storage
            details={"path": path, "reason": reason},
        )


class Base64DecodeError(PicverterException):
    """Exception raised when a base64 payload is malformed."""

    def __init__(self, reason: str):
        super().__init__(
            message=f"Failed to decode base64: {reason}",
            status_code=400,
            details={"reason": reason},
        )


class TempFileError(PicverterException):
    """Exception raised when the scratch file cannot be created or written."""

    def __init__(self, operation: str, reason: str):
        super().__init__(
            message=f"Failed to {operation} temp file: {reason}",
            status_code=500,
            details={"operation": operation, "reason": reason},
        )


# Exception handlers for FastAPI
async def picverter_exception_handler(request: Request, exc: PicverterException) -> JSONResponse:
    """
    Handler for custom Picverter exceptions.

    Args:
        request: FastAPI request
        exc: PicverterException instance

    Returns:
        JSON response with error details
    """
    if exc.status_code >= 500:
        logger.error(f"{exc.__class__.__name__}: {exc.message}", extra={"details": exc.details})
    else:
        logger.warning(f"{exc.__class__.__name__}: {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "details": exc.details, "type": exc.__class__.__name__},
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handler for request validation errors.

    Args:
        request: FastAPI request
        exc: Validation exception

    Returns:
        JSON response with validation error details
    """
    errors = []
    for error in exc.errors():
        errors.append(
            {
                "field": ".".join(str(loc) for loc in error["loc"][1:]),
                "message": error["msg"],
                "type": error["type"],
            }
        )

    logger.warning(f"Validation error: {errors}")

    return JSONResponse(
        status_code=422,
        content={"error": "Validation failed", "details": errors, "type": "ValidationError"},
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler for unexpected exceptions.

    Args:
        request: FastAPI request
        exc: Any exception

    Returns:
        JSON response with generic error message
    """
    logger.error(f"Unexpected error: {exc}", exc_info=True)

    debug_mode = getattr(request.app.state, "debug", False)

    if debug_mode:
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "details": {
                    "exception": str(exc),
                    "type": exc.__class__.__name__,
                    "traceback": traceback.format_exc(),
                },
                "type": "InternalError",
            },
        )
    else:
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "details": {}, "type": "InternalError"},
        )


# Exception mapping for safe_endpoint decorator
# Maps exception types to (status_code, error_message_template, log_level)
EXCEPTION_MAPPING = {
    ValueError: (400, "Invalid value", "warning", lambda e: {"details": str(e)}),
    FileNotFoundError: (404, "File not found", "error", lambda e: {"details": str(e)}),
    PermissionError: (403, "Permission denied", "error", lambda e: {"details": str(e)}),
}


# Decorator for safe endpoint execution
def safe_endpoint(func):
    """
    Decorator to wrap endpoint functions with error handling.

    Domain exceptions pass through to the registered handlers; builtin
    exceptions are translated using EXCEPTION_MAPPING. Synchronous
    endpoints run in the threadpool.
    """

    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            if asyncio.iscoroutinefunction(func):
                return await func(*args, **kwargs)
            else:
                return await run_in_threadpool(func, *args, **kwargs)

        except (PicverterException, HTTPException):
            raise

        except Exception as e:
            exception_type = type(e)

            if exception_type in EXCEPTION_MAPPING:
                status_code, error_msg, log_level, detail_builder = EXCEPTION_MAPPING[
                    exception_type
                ]

                log_message = f"{exception_type.__name__} in {func.__name__}: {e}"
                if log_level == "warning":
                    logger.warning(log_message)
                else:
                    logger.error(log_message)

                detail = {"error": error_msg}
                detail.update(detail_builder(e))

                raise HTTPException(status_code=status_code, detail=detail)

            else:
                logger.error(f"Unexpected error in {func.__name__}: {e}", exc_info=True)
                raise HTTPException(
                    status_code=500, detail={"error": "Internal server error", "details": str(e)}
                )

    return wrapper


# Helper function to register all exception handlers
def register_exception_handlers(app):
    """
    Register all exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(PicverterException, picverter_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Exception handlers registered")
