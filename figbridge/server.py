"""Local FastAPI request surface over the session manager."""

from __future__ import annotations

import logging
from typing import Any
from contextlib import asynccontextmanager
from collections.abc import Callable, Awaitable

from fastapi import FastAPI, Request
from fastapi.responses import ORJSONResponse

from figbridge.state import RuntimeDeps
from figbridge.errors import BridgeError
from figbridge.runtime.logging import configure_logging
from figbridge.runtime.dependencies import build_runtime_deps
from figbridge.handlers import error_response, parse_exec_request

logger = logging.getLogger(__name__)

configure_logging()

BuildDeps = Callable[[], Awaitable[RuntimeDeps]]


def _runtime_deps(request: Request) -> RuntimeDeps:
    deps = getattr(request.app.state, "runtime_deps", None)
    if deps is None:
        raise RuntimeError("Runtime dependencies are not initialized")
    return deps


def create_app(build_deps: BuildDeps = build_runtime_deps) -> FastAPI:
    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        runtime_deps = await build_deps()
        app.state.runtime_deps = runtime_deps
        logger.info("runtime: ready")
        try:
            yield
        finally:
            deps = getattr(app.state, "runtime_deps", None)
            if deps is not None:
                await deps.shutdown()
            logger.info("runtime: stopped")

    app = FastAPI(default_response_class=ORJSONResponse, lifespan=_lifespan)

    @app.get("/health")
    async def health(request: Request) -> dict[str, Any]:
        status = await _runtime_deps(request).manager.health()
        return {"status": "ok", "connected": status.connected, "healthy": status.healthy}

    @app.get("/reconnect")
    async def reconnect(request: Request) -> Any:
        try:
            session = await _runtime_deps(request).manager.reconnect()
        except Exception as exc:
            return error_response(exc)
        return {"status": "reconnected", "title": session.title}

    @app.post("/exec")
    async def execute(request: Request) -> Any:
        manager = _runtime_deps(request).manager
        try:
            action = parse_exec_request(await request.body())
            result = await manager.execute(action)
        except Exception as exc:
            if isinstance(exc, BridgeError):
                logger.info("exec: %s failed: %s", type(exc).__name__, exc)
            return error_response(exc)
        return {"result": result}

    return app


app = create_app()


__all__ = ["app", "create_app"]
