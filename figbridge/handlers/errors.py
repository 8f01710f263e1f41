"""Error helpers for the JSON request surface."""

from __future__ import annotations

import logging
from typing import Any

from fastapi.responses import ORJSONResponse

from figbridge.config.daemon import ERROR_INTERNAL
from figbridge.errors import (
    BridgeError,
    MarkupSyntaxError,
    BatchExecutionError,
    InvalidRequestError,
    ExecutionTimeoutError,
    TargetConnectionError,
)

logger = logging.getLogger(__name__)

STATUS_BAD_REQUEST = 400
STATUS_INTERNAL_ERROR = 500
STATUS_UNAVAILABLE = 503
STATUS_TIMEOUT = 504


def build_error_payload(
    code: str,
    message: str,
    *,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    return {"error": {"code": code, "message": message, "details": dict(details or {})}}


def status_for(exc: BaseException) -> int:
    if isinstance(exc, BatchExecutionError) and exc.__cause__ is not None:
        # A batch reports the status of the unit that broke it.
        return status_for(exc.__cause__)
    if isinstance(exc, (InvalidRequestError, MarkupSyntaxError)):
        return STATUS_BAD_REQUEST
    if isinstance(exc, TargetConnectionError):
        return STATUS_UNAVAILABLE
    if isinstance(exc, ExecutionTimeoutError):
        return STATUS_TIMEOUT
    return STATUS_INTERNAL_ERROR


def _details_for(exc: BaseException) -> dict[str, Any]:
    if isinstance(exc, BatchExecutionError):
        details: dict[str, Any] = {"results": exc.results, "failed_index": exc.failed_index}
        cause = exc.__cause__
        if isinstance(cause, BridgeError):
            details["cause"] = cause.code
        return details
    return {}


def error_response(exc: BaseException) -> ORJSONResponse:
    if isinstance(exc, BridgeError):
        code, message = exc.code, exc.message
    else:
        logger.exception("request failed unexpectedly", exc_info=exc)
        code, message = ERROR_INTERNAL, str(exc) or type(exc).__name__
    return ORJSONResponse(
        build_error_payload(code, message, details=_details_for(exc)),
        status_code=status_for(exc),
    )


__all__ = ["build_error_payload", "error_response", "status_for"]
