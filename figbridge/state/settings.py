"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DebuggerSettings:
    host: str
    port: int
    url_patterns: tuple[str, ...]
    target_selector: str | None
    connect_timeout_s: float
    context_settle_s: float
    directory_timeout_s: float

    @property
    def directory_url(self) -> str:
        return f"http://{self.host}:{self.port}"


@dataclass(frozen=True, slots=True)
class DaemonSettings:
    host: str
    port: int
    health_timeout_s: float
    exec_timeout_s: float
    max_retries: int
    retry_delay_s: float
    warm_connect: bool


@dataclass(frozen=True, slots=True)
class AppSettings:
    debugger: DebuggerSettings
    daemon: DaemonSettings


__all__ = [
    "AppSettings",
    "DaemonSettings",
    "DebuggerSettings",
]
