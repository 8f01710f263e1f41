"""Daemon entry point: serve the request surface on the configured loopback address.

uvicorn maps SIGINT/SIGTERM to lifespan shutdown, which closes the session
before the process exits.
"""

from __future__ import annotations

import uvicorn

from figbridge.runtime.settings import load_settings
from figbridge.config.logging import LOG_LEVEL
from figbridge.runtime.logging import configure_logging

APP_IMPORT_PATH = "figbridge.server:app"
UVICORN_LOG_LEVELS = {"critical", "error", "warning", "info", "debug", "trace"}


def _uvicorn_log_level() -> str:
    level = LOG_LEVEL.lower()
    return level if level in UVICORN_LOG_LEVELS else "info"


def main() -> int:
    configure_logging()
    settings = load_settings()
    uvicorn.run(
        APP_IMPORT_PATH,
        host=settings.daemon.host,
        port=settings.daemon.port,
        log_level=_uvicorn_log_level(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
