"""Request surface helpers (body parsing and error mapping)."""

from .errors import status_for, error_response, build_error_payload
from .exec_request import parse_exec_request

__all__ = [
    "build_error_payload",
    "error_response",
    "parse_exec_request",
    "status_for",
]
