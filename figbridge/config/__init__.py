"""Configuration module exports (env names, defaults and protocol constants only)."""

from .daemon import DEFAULT_DAEMON_PORT
from .debugger import DEFAULT_DEBUG_PORT

__all__ = [
    "DEFAULT_DAEMON_PORT",
    "DEFAULT_DEBUG_PORT",
]
