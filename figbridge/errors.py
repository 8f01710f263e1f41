"""Shared error types for the Figma bridge.

Every error carries a human-readable `message` (also its `str()`) and a stable
`code` used by the request surface.
"""

from __future__ import annotations

from typing import Any, ClassVar
from dataclasses import field, dataclass


@dataclass(eq=False)
class BridgeError(Exception):
    message: str

    code: ClassVar[str] = "internal_error"
    retryable: ClassVar[bool] = True

    def __str__(self) -> str:
        return self.message


@dataclass(eq=False)
class TargetConnectionError(BridgeError):
    """Base for failures while attaching to the target application."""

    code: ClassVar[str] = "connection_error"


@dataclass(eq=False)
class DebuggerUnreachableError(TargetConnectionError):
    code: ClassVar[str] = "debugger_unreachable"


@dataclass(eq=False)
class NotFoundError(TargetConnectionError):
    """No open document matches the target signature (and selector)."""

    code: ClassVar[str] = "not_found"


@dataclass(eq=False)
class ConnectionTimeoutError(TargetConnectionError):
    code: ClassVar[str] = "connection_timeout"


@dataclass(eq=False)
class ContextNotFoundError(TargetConnectionError):
    code: ClassVar[str] = "context_not_found"


@dataclass(eq=False)
class NotConnectedError(TargetConnectionError):
    code: ClassVar[str] = "not_connected"


@dataclass(eq=False)
class ProtocolError(BridgeError):
    """The debugging endpoint answered a request with an error object."""

    code: ClassVar[str] = "protocol_error"


@dataclass(eq=False)
class EvaluationError(BridgeError):
    """The evaluated script raised inside the target application."""

    code: ClassVar[str] = "evaluation_error"


@dataclass(eq=False)
class ExecutionTimeoutError(BridgeError):
    code: ClassVar[str] = "execution_timeout"


@dataclass(eq=False)
class MarkupSyntaxError(BridgeError):
    code: ClassVar[str] = "markup_syntax_error"
    retryable: ClassVar[bool] = False


@dataclass(eq=False)
class InvalidRequestError(BridgeError):
    code: ClassVar[str] = "invalid_request"
    retryable: ClassVar[bool] = False


@dataclass(eq=False)
class BatchExecutionError(BridgeError):
    """A batch unit failed; units before it stay applied."""

    results: list[Any] = field(default_factory=list)
    failed_index: int = 0

    code: ClassVar[str] = "batch_failed"


@dataclass(eq=False)
class DaemonRequestError(BridgeError):
    """Raised by the daemon client for error replies or an unreachable daemon."""

    status_code: int | None = None
    error_code: str | None = None

    code: ClassVar[str] = "daemon_error"


def is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, BridgeError):
        return exc.retryable
    return isinstance(exc, Exception)


__all__ = [
    "BatchExecutionError",
    "BridgeError",
    "ConnectionTimeoutError",
    "ContextNotFoundError",
    "DaemonRequestError",
    "DebuggerUnreachableError",
    "EvaluationError",
    "ExecutionTimeoutError",
    "InvalidRequestError",
    "MarkupSyntaxError",
    "NotConnectedError",
    "NotFoundError",
    "ProtocolError",
    "TargetConnectionError",
    "is_retryable",
]
