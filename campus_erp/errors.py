"""
Request-level error taxonomy and the FastAPI handlers that render it.

Every error response body has the shape {"error": <message>, "details"?: ...}.
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    status_code = 500

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details


class MissingParameter(GatewayError):
    status_code = 400


class Unauthorized(GatewayError):
    status_code = 401


class NotFound(GatewayError):
    status_code = 404


class Conflict(GatewayError):
    status_code = 409


class PayloadTooLarge(GatewayError):
    status_code = 413


class DependencyFailure(GatewayError):
    """A DynamoDB or S3 call failed; `details` holds the raw provider message."""
    status_code = 500


def require_params(**params: Any) -> None:
    """Raise MissingParameter naming every parameter that is None or blank."""
    missing = [name for name, value in params.items() if value is None or (isinstance(value, str) and not value.strip())]
    if missing:
        raise MissingParameter(f"{' and '.join(missing)} required")


def _envelope(status_code: int, message: str, details: Optional[Any] = None) -> JSONResponse:
    body = {"error": message}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def register_error_handlers(app: FastAPI, expose_details: bool = False) -> None:
    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        if isinstance(exc, DependencyFailure):
            logger.error(f"{request.method} {request.url.path} failed: {exc.message} - {exc.details}")
            return _envelope(exc.status_code, exc.message, exc.details if expose_details else None)
        if exc.status_code == 404 or exc.status_code == 409:
            logger.warning(f"{request.method} {request.url.path}: {exc.message}")
        return _envelope(exc.status_code, exc.message, exc.details)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"{request.method} {request.url.path}: invalid request {exc.errors()}")
        return _envelope(400, "Invalid request", exc.errors())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return _envelope(500, "Internal server error", str(exc) if expose_details else None)
