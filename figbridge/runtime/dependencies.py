"""Runtime dependency construction (session manager + settings)."""

from __future__ import annotations

import asyncio
import logging

from figbridge.state import RuntimeDeps
from figbridge.state.settings import AppSettings
from figbridge.daemon.manager import SessionManager

from .settings import load_settings

logger = logging.getLogger(__name__)


async def _warm_up(manager: SessionManager) -> None:
    try:
        session = await manager.ensure_session()
    except Exception as exc:
        # Not fatal: the first request connects (and retries) on demand.
        logger.warning("runtime: initial connection failed: %s", exc)
        return
    logger.info("runtime: connected to %r", session.title)


async def build_runtime_deps(settings: AppSettings | None = None) -> RuntimeDeps:
    settings = settings or load_settings()
    manager = SessionManager(settings)

    warmup_task: asyncio.Task | None = None
    if settings.daemon.warm_connect:
        warmup_task = asyncio.create_task(_warm_up(manager))

    return RuntimeDeps(
        manager=manager,
        settings=settings,
        _warmup_task=warmup_task,
    )


__all__ = ["RuntimeDeps", "build_runtime_deps"]
