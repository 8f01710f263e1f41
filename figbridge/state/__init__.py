from .page import PageInfo
from .retry import RetryAttempt
from .health import HealthStatus
from .runtime import RuntimeDeps
from .session import SessionState
from .settings import AppSettings, DaemonSettings, DebuggerSettings

__all__ = [
    "AppSettings",
    "DaemonSettings",
    "DebuggerSettings",
    "HealthStatus",
    "PageInfo",
    "RetryAttempt",
    "RuntimeDeps",
    "SessionState",
]
