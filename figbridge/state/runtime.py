"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from figbridge.state.settings import AppSettings
    from figbridge.daemon.manager import SessionManager


@dataclass(slots=True)
class RuntimeDeps:
    manager: SessionManager
    settings: AppSettings
    _warmup_task: asyncio.Task | None = None

    async def shutdown(self) -> None:
        task = self._warmup_task
        self._warmup_task = None
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError, Exception):
                await task
        try:
            await self.manager.close()
        except Exception:
            logger.exception("runtime shutdown failed")


__all__ = ["RuntimeDeps"]
