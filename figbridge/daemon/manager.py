"""Session manager: owns at most one debugging session and runs actions against it."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from collections.abc import Callable, Awaitable

from figbridge.transport import DebugSession, open_session
from figbridge.errors import ExecutionTimeoutError
from figbridge.state import HealthStatus, RetryAttempt
from figbridge.state.settings import AppSettings
from figbridge.config.protocol import ROOT_PROBE_EXPRESSION

from .actions import Action
from .health import probe_health
from .retry import SleepFn, run_with_retry

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], Awaitable[DebugSession]]


def _consume_connect_result(task: asyncio.Task) -> None:
    # Callers that were cancelled while shielded never read the outcome.
    if not task.cancelled() and task.exception() is not None:
        logger.debug("manager: connect attempt failed: %s", task.exception())


class SessionManager:
    """Explicit, injectable owner of the current session.

    Invariants:
    - at most one session is current, and at most one connect is in flight;
    - the current reference is cleared before the old session is closed;
    - concurrent `ensure_session()` callers share a single connect attempt
      and all observe its outcome.
    """

    def __init__(
        self,
        settings: AppSettings,
        *,
        session_factory: SessionFactory | None = None,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self._settings = settings
        self._session_factory = session_factory or self._open_session
        self._sleep = sleep
        self._session: DebugSession | None = None
        self._connect_task: asyncio.Task[DebugSession] | None = None

    @property
    def current_session(self) -> DebugSession | None:
        return self._session

    @property
    def connection_in_flight(self) -> bool:
        return self._connect_task is not None

    async def _open_session(self) -> DebugSession:
        return await open_session(self._settings.debugger)

    async def _probe(self, session: DebugSession) -> HealthStatus:
        return await probe_health(session, ROOT_PROBE_EXPRESSION, self._settings.daemon.health_timeout_s)

    async def _connect(self) -> DebugSession:
        try:
            session = await self._session_factory()
            self._session = session
            logger.info("manager: session ready for %r", session.title)
            return session
        finally:
            if self._connect_task is asyncio.current_task():
                self._connect_task = None

    async def ensure_session(self) -> DebugSession:
        session = self._session
        if session is not None:
            status = await self._probe(session)
            if status.healthy:
                return session
            logger.info("manager: session to %r is stale (connected=%s); reconnecting", session.title, status.connected)
            await self._discard(session)
            if self._session is not None:
                # A concurrent caller already replaced it while we probed.
                return self._session

        task = self._connect_task
        if task is None:
            task = asyncio.create_task(self._connect())
            task.add_done_callback(_consume_connect_result)
            self._connect_task = task
        return await asyncio.shield(task)

    async def health(self) -> HealthStatus:
        """Report on the current session without ever connecting."""
        session = self._session
        if session is None:
            return HealthStatus(connected=False, healthy=False)
        return await self._probe(session)

    async def reconnect(self) -> DebugSession:
        await self.discard_session()
        return await self.ensure_session()

    async def discard_session(self) -> None:
        await self._discard(self._session)

    async def _discard(self, session: DebugSession | None) -> None:
        if session is None:
            return
        if self._session is session:
            self._session = None
        try:
            await session.close()
        except Exception:
            logger.exception("manager: closing session %r failed", session.title)

    async def _evaluate(self, script: str) -> Any:
        session = await self.ensure_session()
        timeout_s = self._settings.daemon.exec_timeout_s
        try:
            return await asyncio.wait_for(session.evaluate(script), timeout=timeout_s)
        except asyncio.TimeoutError as exc:
            # The remote evaluation is not cancelled and may still complete.
            raise ExecutionTimeoutError(f"execution timed out after {timeout_s:g}s") from exc

    async def _on_retry(self, exc: BaseException, attempt: RetryAttempt) -> None:
        logger.warning("manager: forcing reconnect after failed attempt %d", attempt.index)
        await self.discard_session()

    async def execute(self, action: Action, *, max_retries: int | None = None) -> Any:
        daemon = self._settings.daemon
        retries = daemon.max_retries if max_retries is None else max_retries

        async def _attempt(attempt: RetryAttempt) -> Any:
            if attempt.index:
                logger.info("manager: retrying %s (attempt %d)", action.kind, attempt.index)
            return await action.run(self._evaluate)

        return await run_with_retry(
            _attempt,
            max_retries=retries,
            delay_s=daemon.retry_delay_s,
            on_retry=self._on_retry,
            sleep=self._sleep,
        )

    async def close(self) -> None:
        task, self._connect_task = self._connect_task, None
        if task is not None and not task.done():
            task.cancel()
            await asyncio.wait({task})
        await self.discard_session()


__all__ = ["SessionFactory", "SessionManager"]
