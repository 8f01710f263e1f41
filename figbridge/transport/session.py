"""One live Chrome DevTools Protocol connection to an open document."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any
from collections.abc import Callable, Awaitable

import orjson
import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException

from figbridge.state import SessionState
from figbridge.config.debugger import DEFAULT_CONTEXT_SETTLE_S
from figbridge.errors import ProtocolError, EvaluationError, NotConnectedError, DebuggerUnreachableError
from figbridge.config.protocol import (
    CDP_KEY_ID,
    SESSION_OPEN,
    CDP_KEY_ERROR,
    CDP_KEY_METHOD,
    CDP_KEY_PARAMS,
    CDP_KEY_RESULT,
    SESSION_CLOSED,
    SESSION_CONNECTING,
    CDP_RUNTIME_ENABLE,
    CDP_RUNTIME_EVALUATE,
    SESSION_DISCONNECTED,
    ROOT_PROBE_EXPRESSION,
    CDP_EVENT_CONTEXT_CREATED,
    CDP_EVENT_CONTEXTS_CLEARED,
    CDP_EVENT_CONTEXT_DESTROYED,
)

from .discovery import find_target_context

logger = logging.getLogger(__name__)

ConnectFn = Callable[..., Awaitable[Any]]

_READER_STOP_TIMEOUT_S = 1.0


def _describe_exception(details: dict[str, Any]) -> str:
    exception = details.get("exception")
    if isinstance(exception, dict):
        description = exception.get("description")
        if isinstance(description, str) and description:
            return description
    text = details.get("text")
    if isinstance(text, str) and text:
        return text
    return "Evaluation error"


class DebugSession:
    """A single websocket to one document's debugger plus request correlation state.

    Requests are correlated by id only: the endpoint may answer out of order.
    A session is never reused after `close()`; build a new one instead.
    """

    def __init__(
        self,
        ws_url: str,
        *,
        title: str = "",
        settle_delay_s: float = DEFAULT_CONTEXT_SETTLE_S,
        probe_expression: str = ROOT_PROBE_EXPRESSION,
        connect_fn: ConnectFn | None = None,
    ) -> None:
        self.ws_url = ws_url
        self.title = title
        self._settle_delay_s = max(0.0, float(settle_delay_s))
        self._probe_expression = probe_expression
        self._connect_fn = connect_fn or websockets.connect

        self._state = SessionState()
        self._ws: Any = None
        self._reader_task: asyncio.Task | None = None
        self._reader_alive = False
        self._pending: dict[int, asyncio.Future[dict[str, Any]]] = {}

    @property
    def phase(self) -> str:
        return self._state.phase

    @property
    def contexts(self) -> tuple[dict[str, Any], ...]:
        return tuple(self._state.contexts)

    @property
    def target_context_id(self) -> int | None:
        return self._state.target_context_id

    @property
    def context_lost(self) -> bool:
        return self._state.context_lost

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def is_open(self) -> bool:
        return self._state.phase == SESSION_OPEN and self._transport_ready()

    def _transport_ready(self) -> bool:
        return self._ws is not None and self._reader_alive

    async def open(self) -> None:
        """Connect, enable runtime events, wait for contexts to settle and find the target context."""
        if self._state.phase != SESSION_DISCONNECTED:
            raise NotConnectedError("a closed or opening session cannot be reopened")
        self._state.phase = SESSION_CONNECTING

        try:
            self._ws = await self._connect_fn(self.ws_url, max_size=None)
        except (OSError, WebSocketException) as exc:
            raise DebuggerUnreachableError(f"could not open debugger websocket {self.ws_url}: {exc}") from exc

        self._reader_alive = True
        self._reader_task = asyncio.create_task(self._read_loop(self._ws))

        await self.send(CDP_RUNTIME_ENABLE)
        await asyncio.sleep(self._settle_delay_s)

        ctx_id = await find_target_context(self, self._state.contexts, self._probe_expression)
        self._state.target_context_id = ctx_id
        self._state.phase = SESSION_OPEN
        logger.info("session: attached to %r (context %s)", self.title, ctx_id)

    async def send(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        if not self._transport_ready():
            raise NotConnectedError("not connected to the debugging endpoint")

        self._state.next_request_id += 1
        req_id = self._state.next_request_id
        fut: asyncio.Future[dict[str, Any]] = asyncio.get_running_loop().create_future()
        self._pending[req_id] = fut

        message = {CDP_KEY_ID: req_id, CDP_KEY_METHOD: method, CDP_KEY_PARAMS: params or {}}
        try:
            await self._ws.send(orjson.dumps(message).decode("utf-8"))
            reply = await fut
        except ConnectionClosed as exc:
            raise NotConnectedError(f"debugger connection closed: {exc}") from exc
        finally:
            # Already removed by the reader when the reply arrived; this covers cancellation.
            self._pending.pop(req_id, None)

        error = reply.get(CDP_KEY_ERROR)
        if error is not None:
            detail = error.get("message") if isinstance(error, dict) else str(error)
            raise ProtocolError(f"{method} failed: {detail or 'unknown error'}")
        result = reply.get(CDP_KEY_RESULT)
        return result if isinstance(result, dict) else {}

    async def evaluate(self, expression: str) -> Any:
        ctx_id = self._state.target_context_id
        if ctx_id is None or self._state.phase != SESSION_OPEN:
            raise NotConnectedError("not connected to the target scripting context")

        result = await self.send(
            CDP_RUNTIME_EVALUATE,
            {
                "expression": expression,
                "contextId": ctx_id,
                "returnByValue": True,
                "awaitPromise": True,
            },
        )
        details = result.get("exceptionDetails")
        if details:
            raise EvaluationError(_describe_exception(details) if isinstance(details, dict) else str(details))
        remote = result.get("result")
        # Undefined comes back as {"type": "undefined"} without a value.
        return remote.get("value") if isinstance(remote, dict) else None

    async def close(self) -> None:
        if self._state.phase == SESSION_CLOSED:
            return
        self._state.phase = SESSION_CLOSED

        ws, self._ws = self._ws, None
        task, self._reader_task = self._reader_task, None
        if ws is not None:
            with contextlib.suppress(Exception):
                await ws.close()
        if task is not None and not task.done():
            task.cancel()
            await asyncio.wait({task}, timeout=_READER_STOP_TIMEOUT_S)

        self._reader_alive = False
        self._fail_pending("session closed")
        self._state.contexts.clear()
        self._state.target_context_id = None
        logger.debug("session: closed %r", self.title)

    async def _read_loop(self, ws: Any) -> None:
        try:
            async for raw in ws:
                self._dispatch(raw)
        except asyncio.CancelledError:
            return
        except ConnectionClosed as exc:
            logger.info("session: connection closed by peer (%s)", exc)
        except Exception:
            logger.exception("session: reader failed")
        finally:
            self._reader_alive = False
            self._fail_pending("debugger connection closed")

    def _dispatch(self, raw: str | bytes) -> None:
        try:
            msg = orjson.loads(raw)
        except orjson.JSONDecodeError:
            logger.debug("session: dropping non-JSON frame")
            return
        if not isinstance(msg, dict):
            return

        req_id = msg.get(CDP_KEY_ID)
        if req_id is not None:
            fut = self._pending.pop(req_id, None)
            if fut is not None and not fut.done():
                fut.set_result(msg)
            return

        method = msg.get(CDP_KEY_METHOD)
        if isinstance(method, str):
            params = msg.get(CDP_KEY_PARAMS)
            self._handle_event(method, params if isinstance(params, dict) else {})

    def _handle_event(self, method: str, params: dict[str, Any]) -> None:
        if method == CDP_EVENT_CONTEXT_CREATED:
            ctx = params.get("context")
            if isinstance(ctx, dict):
                self._state.contexts.append(ctx)
            return

        target = self._state.target_context_id
        if target is None:
            return
        if (method == CDP_EVENT_CONTEXT_DESTROYED and params.get("executionContextId") == target) or (
            method == CDP_EVENT_CONTEXTS_CLEARED
        ):
            if not self._state.context_lost:
                logger.warning("session: target context %s went away", target)
            self._state.context_lost = True

    def _fail_pending(self, reason: str) -> None:
        pending, self._pending = self._pending, {}
        for fut in pending.values():
            if not fut.done():
                fut.set_exception(NotConnectedError(reason))


__all__ = ["DebugSession"]
