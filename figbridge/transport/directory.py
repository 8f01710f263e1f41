"""Debugging endpoint directory: list open documents and pick the target."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import httpx
import orjson

from figbridge.state import PageInfo
from figbridge.config.debugger import DIRECTORY_PATH
from figbridge.state.settings import DebuggerSettings
from figbridge.errors import NotFoundError, DebuggerUnreachableError

logger = logging.getLogger(__name__)


async def list_pages(
    settings: DebuggerSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[PageInfo]:
    """Return every open page/document the debugging endpoint reports."""
    url = f"{settings.directory_url}{DIRECTORY_PATH}"
    try:
        async with httpx.AsyncClient(timeout=settings.directory_timeout_s, transport=transport) as client:
            resp = await client.get(url)
            resp.raise_for_status()
            entries = orjson.loads(resp.content)
    except (httpx.HTTPError, orjson.JSONDecodeError) as exc:
        raise DebuggerUnreachableError(
            f"debugging endpoint at {settings.host}:{settings.port} is not reachable ({exc}); "
            "is the app running with remote debugging enabled?"
        ) from exc

    if not isinstance(entries, list):
        raise DebuggerUnreachableError(f"unexpected directory payload from {url}")
    return [PageInfo.from_directory_entry(e) for e in entries if isinstance(e, dict)]


def is_eligible(page: PageInfo, url_patterns: Sequence[str]) -> bool:
    return any(pattern in page.url for pattern in url_patterns)


def select_page(
    pages: Sequence[PageInfo],
    url_patterns: Sequence[str],
    selector: str | None = None,
) -> PageInfo:
    eligible = [p for p in pages if is_eligible(p, url_patterns)]

    if selector:
        page = next((p for p in eligible if selector in p.title), None)
        if page is None and eligible:
            titles = ", ".join(p.title for p in eligible)
            raise NotFoundError(f'No open document matches "{selector}". Available documents: {titles}')
    else:
        page = eligible[0] if eligible else None

    if page is None:
        raise NotFoundError("No design file open. Please open a design file in the desktop app.")
    if page.ws_url is None:
        raise NotFoundError(f'Document "{page.title}" is already attached to another debugger.')

    logger.debug("directory: selected %r (%s)", page.title, page.id)
    return page


__all__ = ["is_eligible", "list_pages", "select_page"]
