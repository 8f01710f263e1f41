"""Open-document descriptors from the debugging endpoint directory."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PageInfo:
    title: str
    id: str
    url: str
    ws_url: str | None

    @classmethod
    def from_directory_entry(cls, entry: dict[str, Any]) -> PageInfo:
        ws_url = entry.get("webSocketDebuggerUrl")
        return cls(
            title=str(entry.get("title") or ""),
            id=str(entry.get("id") or ""),
            url=str(entry.get("url") or ""),
            ws_url=ws_url if isinstance(ws_url, str) and ws_url else None,
        )


__all__ = ["PageInfo"]
