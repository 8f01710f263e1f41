"""Full connect sequence: directory query, page selection, session open, discovery."""

from __future__ import annotations

import asyncio
import logging
import contextlib

import httpx

from figbridge.state.settings import DebuggerSettings
from figbridge.errors import ConnectionTimeoutError

from .session import ConnectFn, DebugSession
from .directory import list_pages, select_page

logger = logging.getLogger(__name__)


async def _connect(
    settings: DebuggerSettings,
    selector: str | None,
    connect_fn: ConnectFn | None,
    transport: httpx.AsyncBaseTransport | None,
) -> DebugSession:
    pages = await list_pages(settings, transport=transport)
    page = select_page(pages, settings.url_patterns, selector)

    session = DebugSession(
        page.ws_url or "",
        title=page.title,
        settle_delay_s=settings.context_settle_s,
        connect_fn=connect_fn,
    )
    try:
        await session.open()
    except BaseException:
        with contextlib.suppress(Exception):
            await session.close()
        raise
    return session


async def open_session(
    settings: DebuggerSettings,
    *,
    selector: str | None = None,
    connect_fn: ConnectFn | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> DebugSession:
    """Attach to the selected document, or fail without leaving anything open.

    No retry happens here; the session manager owns that policy.
    """
    selector = selector if selector is not None else settings.target_selector
    try:
        return await asyncio.wait_for(
            _connect(settings, selector, connect_fn, transport),
            timeout=settings.connect_timeout_s,
        )
    except asyncio.TimeoutError as exc:
        logger.warning("connect: gave up after %.1fs", settings.connect_timeout_s)
        raise ConnectionTimeoutError(
            f"connecting to the design app timed out after {settings.connect_timeout_s:g}s"
        ) from exc


__all__ = ["open_session"]
