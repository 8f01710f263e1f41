"""Logging configuration (env-resolved constants only)."""

from __future__ import annotations

import os

LOG_LEVEL: str = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Loggers that are chatty at DEBUG/INFO during connect and polling.
TRANSPORT_LOGGERS: tuple[str, ...] = ("websockets", "httpx", "httpcore")
ENV_SHOW_TRANSPORT_LOGS = "SHOW_TRANSPORT_LOGS"

__all__ = [
    "ENV_SHOW_TRANSPORT_LOGS",
    "LOG_FORMAT",
    "LOG_LEVEL",
    "TRANSPORT_LOGGERS",
]
