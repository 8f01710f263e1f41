"""Environment parsing for runtime settings.

Env names and defaults live in `figbridge/config/*`; this module resolves them
into the frozen dataclasses of `figbridge/state/settings.py`.
"""

from __future__ import annotations

import os

from figbridge.state.settings import AppSettings, DaemonSettings, DebuggerSettings
from figbridge.config.debugger import (
    ENV_DEBUG_HOST,
    ENV_DEBUG_PORT,
    ENV_URL_PATTERNS,
    DEFAULT_DEBUG_HOST,
    DEFAULT_DEBUG_PORT,
    ENV_CONTEXT_SETTLE_S,
    DEFAULT_URL_PATTERNS,
    ENV_TARGET_SELECTOR,
    ENV_CONNECT_TIMEOUT_S,
    DEFAULT_CONTEXT_SETTLE_S,
    ENV_DIRECTORY_TIMEOUT_S,
    DEFAULT_CONNECT_TIMEOUT_S,
    DEFAULT_DIRECTORY_TIMEOUT_S,
)
from figbridge.config.daemon import (
    ENV_DAEMON_HOST,
    ENV_DAEMON_PORT,
    ENV_MAX_RETRIES,
    ENV_RETRY_DELAY_S,
    ENV_WARM_CONNECT,
    ENV_EXEC_TIMEOUT_S,
    DEFAULT_DAEMON_HOST,
    DEFAULT_DAEMON_PORT,
    DEFAULT_MAX_RETRIES,
    ENV_HEALTH_TIMEOUT_S,
    DEFAULT_RETRY_DELAY_S,
    DEFAULT_WARM_CONNECT,
    DEFAULT_EXEC_TIMEOUT_S,
    DEFAULT_HEALTH_TIMEOUT_S,
)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _optional_str_env(name: str) -> str | None:
    raw = (os.getenv(name) or "").strip()
    return raw or None


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except Exception:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _list_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    items = tuple(part.strip() for part in raw.split(",") if part.strip())
    return items or default


def _positive(value: float, default: float) -> float:
    return value if value > 0 else default


def _load_debugger_settings() -> DebuggerSettings:
    port = _int_env(ENV_DEBUG_PORT, DEFAULT_DEBUG_PORT)
    if port <= 0 or port > 65535:
        port = DEFAULT_DEBUG_PORT

    return DebuggerSettings(
        host=_str_env(ENV_DEBUG_HOST, DEFAULT_DEBUG_HOST),
        port=port,
        url_patterns=_list_env(ENV_URL_PATTERNS, DEFAULT_URL_PATTERNS),
        target_selector=_optional_str_env(ENV_TARGET_SELECTOR),
        connect_timeout_s=_positive(
            _float_env(ENV_CONNECT_TIMEOUT_S, DEFAULT_CONNECT_TIMEOUT_S), DEFAULT_CONNECT_TIMEOUT_S
        ),
        context_settle_s=max(0.0, _float_env(ENV_CONTEXT_SETTLE_S, DEFAULT_CONTEXT_SETTLE_S)),
        directory_timeout_s=_positive(
            _float_env(ENV_DIRECTORY_TIMEOUT_S, DEFAULT_DIRECTORY_TIMEOUT_S), DEFAULT_DIRECTORY_TIMEOUT_S
        ),
    )


def _load_daemon_settings() -> DaemonSettings:
    port = _int_env(ENV_DAEMON_PORT, DEFAULT_DAEMON_PORT)
    if port <= 0 or port > 65535:
        port = DEFAULT_DAEMON_PORT

    return DaemonSettings(
        host=_str_env(ENV_DAEMON_HOST, DEFAULT_DAEMON_HOST),
        port=port,
        health_timeout_s=_positive(
            _float_env(ENV_HEALTH_TIMEOUT_S, DEFAULT_HEALTH_TIMEOUT_S), DEFAULT_HEALTH_TIMEOUT_S
        ),
        exec_timeout_s=_positive(_float_env(ENV_EXEC_TIMEOUT_S, DEFAULT_EXEC_TIMEOUT_S), DEFAULT_EXEC_TIMEOUT_S),
        max_retries=max(0, _int_env(ENV_MAX_RETRIES, DEFAULT_MAX_RETRIES)),
        retry_delay_s=max(0.0, _float_env(ENV_RETRY_DELAY_S, DEFAULT_RETRY_DELAY_S)),
        warm_connect=_bool_env(ENV_WARM_CONNECT, DEFAULT_WARM_CONNECT),
    )


def load_settings() -> AppSettings:
    return AppSettings(
        debugger=_load_debugger_settings(),
        daemon=_load_daemon_settings(),
    )


__all__ = ["load_settings"]
