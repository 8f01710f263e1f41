"""Logging initialization."""

from __future__ import annotations

import os
import logging

from figbridge.config.logging import LOG_LEVEL, LOG_FORMAT, TRANSPORT_LOGGERS, ENV_SHOW_TRANSPORT_LOGS


def configure_logging() -> None:
    # websockets/httpx log every frame and request at DEBUG. Keep them tame unless explicitly enabled.
    if (os.getenv(ENV_SHOW_TRANSPORT_LOGS) or "").strip().lower() not in {"1", "true", "yes"}:
        for name in TRANSPORT_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)


__all__ = ["configure_logging"]
