"""Async client for the local daemon (used by the CLI and library callers)."""

from __future__ import annotations

from typing import Any
from collections.abc import Sequence

import httpx
import orjson

from figbridge.state import HealthStatus
from figbridge.scripting import queries
from figbridge.errors import DaemonRequestError
from figbridge.config.daemon import (
    EXEC_KEY_JSX,
    ACTION_EVAL,
    EXEC_KEY_CODE,
    ACTION_RENDER,
    EXEC_KEY_ACTION,
    EXEC_KEY_JSX_ARRAY,
    ACTION_RENDER_BATCH,
    DEFAULT_DAEMON_HOST,
    DEFAULT_DAEMON_PORT,
    DEFAULT_CLIENT_TIMEOUT_S,
    DEFAULT_CLIENT_PROBE_TIMEOUT_S,
)


class DaemonClient:
    """Thin request wrapper; every error reply becomes a `DaemonRequestError`."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout_s: float = DEFAULT_CLIENT_TIMEOUT_S,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or f"http://{DEFAULT_DAEMON_HOST}:{DEFAULT_DAEMON_PORT}").rstrip("/")
        self.timeout_s = timeout_s
        self._transport = transport

    async def _request(
        self,
        method: str,
        path: str,
        *,
        body: dict[str, Any] | None = None,
        timeout_s: float | None = None,
    ) -> dict[str, Any]:
        content = orjson.dumps(body) if body is not None else None
        headers = {"content-type": "application/json"} if content is not None else None
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=timeout_s or self.timeout_s,
                transport=self._transport,
            ) as client:
                resp = await client.request(method, path, content=content, headers=headers)
        except httpx.HTTPError as exc:
            raise DaemonRequestError(f"daemon at {self.base_url} is not reachable: {exc}") from exc

        try:
            data = orjson.loads(resp.content)
        except orjson.JSONDecodeError as exc:
            raise DaemonRequestError(
                f"daemon returned a non-JSON reply (HTTP {resp.status_code})",
                status_code=resp.status_code,
            ) from exc
        if not isinstance(data, dict):
            raise DaemonRequestError("daemon reply must be a JSON object", status_code=resp.status_code)

        error = data.get("error")
        if error is not None:
            code = None
            if isinstance(error, dict):
                message = error.get("message")
                code = error.get("code")
            else:
                message = str(error)
            raise DaemonRequestError(
                str(message or "daemon request failed"),
                status_code=resp.status_code,
                error_code=code if isinstance(code, str) else None,
            )
        if resp.status_code >= 400:
            raise DaemonRequestError(f"daemon answered HTTP {resp.status_code}", status_code=resp.status_code)
        return data

    async def is_running(self) -> bool:
        try:
            await self._request("GET", "/health", timeout_s=DEFAULT_CLIENT_PROBE_TIMEOUT_S)
        except DaemonRequestError:
            return False
        return True

    async def health(self) -> HealthStatus:
        data = await self._request("GET", "/health")
        return HealthStatus(connected=bool(data.get("connected")), healthy=bool(data.get("healthy")))

    async def reconnect(self) -> str:
        """Force a fresh session; returns the attached document title."""
        data = await self._request("GET", "/reconnect")
        return str(data.get("title") or "")

    async def execute(self, action: str, **payload: Any) -> Any:
        data = await self._request("POST", "/exec", body={EXEC_KEY_ACTION: action, **payload})
        return data.get("result")

    async def eval(self, code: str) -> Any:
        return await self.execute(ACTION_EVAL, **{EXEC_KEY_CODE: code})

    async def render(self, markup: str) -> Any:
        return await self.execute(ACTION_RENDER, **{EXEC_KEY_JSX: markup})

    async def render_batch(self, markups: Sequence[str]) -> list[Any]:
        result = await self.execute(ACTION_RENDER_BATCH, **{EXEC_KEY_JSX_ARRAY: list(markups)})
        return list(result or [])

    async def page_info(self) -> dict[str, Any]:
        return await self.eval(queries.page_info())

    async def canvas_bounds(self) -> dict[str, Any]:
        return await self.eval(queries.canvas_bounds())

    async def list_nodes(self, limit: int = queries.DEFAULT_LIST_LIMIT) -> list[dict[str, Any]]:
        return await self.eval(queries.list_nodes(limit))

    async def get_node(self, node_id: str) -> dict[str, Any] | None:
        return await self.eval(queries.get_node(node_id))

    async def delete_node(self, node_id: str) -> dict[str, Any]:
        return await self.eval(queries.delete_node(node_id))

    async def move_node(self, node_id: str, x: float, y: float) -> dict[str, Any]:
        return await self.eval(queries.move_node(node_id, x, y))

    async def resize_node(self, node_id: str, width: float, height: float) -> dict[str, Any]:
        return await self.eval(queries.resize_node(node_id, width, height))

    async def rename_node(self, node_id: str, name: str) -> dict[str, Any]:
        return await self.eval(queries.rename_node(node_id, name))

    async def set_fill(self, node_id: str, color: str) -> dict[str, Any]:
        return await self.eval(queries.set_fill(node_id, color))

    async def set_radius(self, node_id: str, radius: float) -> dict[str, Any]:
        return await self.eval(queries.set_radius(node_id, radius))

    async def duplicate_node(
        self,
        node_id: str,
        offset_x: float = queries.DEFAULT_DUPLICATE_OFFSET[0],
        offset_y: float = queries.DEFAULT_DUPLICATE_OFFSET[1],
    ) -> dict[str, Any] | None:
        return await self.eval(queries.duplicate_node(node_id, offset_x, offset_y))

    async def get_selection(self) -> list[dict[str, Any]]:
        return await self.eval(queries.get_selection())

    async def set_selection(self, node_ids: str | Sequence[str]) -> list[str]:
        """Returns the ids that were actually selected."""
        return await self.eval(queries.set_selection(node_ids))

    async def get_node_tree(
        self, node_id: str | None = None, max_depth: int = queries.DEFAULT_TREE_DEPTH
    ) -> dict[str, Any] | None:
        return await self.eval(queries.get_node_tree(node_id, max_depth))

    async def to_component(self, node_ids: str | Sequence[str]) -> list[dict[str, Any]]:
        return await self.eval(queries.to_component(node_ids))

    async def get_variables(self, variable_type: str | None = None) -> list[dict[str, Any]]:
        return await self.eval(queries.get_variables(variable_type))

    async def get_collections(self) -> list[dict[str, Any]]:
        return await self.eval(queries.get_collections())

    async def file_key(self) -> str | None:
        return await self.eval(queries.file_key())

    async def arrange_nodes(
        self, gap: float = queries.DEFAULT_ARRANGE_GAP, columns: int | None = None
    ) -> dict[str, Any]:
        return await self.eval(queries.arrange_nodes(gap, columns))


__all__ = ["DaemonClient"]
