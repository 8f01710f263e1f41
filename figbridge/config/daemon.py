"""Session manager and request surface configuration (env names and defaults)."""

from __future__ import annotations

ENV_DAEMON_HOST = "DAEMON_HOST"
ENV_DAEMON_PORT = "DAEMON_PORT"
ENV_HEALTH_TIMEOUT_S = "DAEMON_HEALTH_TIMEOUT_S"
ENV_EXEC_TIMEOUT_S = "DAEMON_EXEC_TIMEOUT_S"
ENV_MAX_RETRIES = "DAEMON_MAX_RETRIES"
ENV_RETRY_DELAY_S = "DAEMON_RETRY_DELAY_S"
ENV_WARM_CONNECT = "DAEMON_WARM_CONNECT"

DEFAULT_DAEMON_HOST = "127.0.0.1"
DEFAULT_DAEMON_PORT = 3456
DEFAULT_HEALTH_TIMEOUT_S = 2.0
DEFAULT_EXEC_TIMEOUT_S = 30.0
DEFAULT_MAX_RETRIES = 2
# Lets the debugging port release and the app settle before reconnecting.
DEFAULT_RETRY_DELAY_S = 0.5
DEFAULT_WARM_CONNECT = True

# Client side (CLI and library callers).
DEFAULT_CLIENT_TIMEOUT_S = 60.0
DEFAULT_CLIENT_PROBE_TIMEOUT_S = 1.0

# Request surface
EXEC_KEY_ACTION = "action"
EXEC_KEY_CODE = "code"
EXEC_KEY_JSX = "jsx"
EXEC_KEY_JSX_ARRAY = "jsxArray"

ACTION_EVAL = "eval"
ACTION_RENDER = "render"
ACTION_RENDER_BATCH = "render-batch"

# Errors (error.code values not owned by an exception type)
ERROR_INTERNAL = "internal_error"

__all__ = [
    "ACTION_EVAL",
    "ACTION_RENDER",
    "ACTION_RENDER_BATCH",
    "DEFAULT_CLIENT_PROBE_TIMEOUT_S",
    "DEFAULT_CLIENT_TIMEOUT_S",
    "DEFAULT_DAEMON_HOST",
    "DEFAULT_DAEMON_PORT",
    "DEFAULT_EXEC_TIMEOUT_S",
    "DEFAULT_HEALTH_TIMEOUT_S",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_RETRY_DELAY_S",
    "DEFAULT_WARM_CONNECT",
    "ENV_DAEMON_HOST",
    "ENV_DAEMON_PORT",
    "ENV_EXEC_TIMEOUT_S",
    "ENV_HEALTH_TIMEOUT_S",
    "ENV_MAX_RETRIES",
    "ENV_RETRY_DELAY_S",
    "ENV_WARM_CONNECT",
    "ERROR_INTERNAL",
    "EXEC_KEY_ACTION",
    "EXEC_KEY_CODE",
    "EXEC_KEY_JSX",
    "EXEC_KEY_JSX_ARRAY",
]
