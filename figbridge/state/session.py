"""Per-connection state for a debugging session."""

from __future__ import annotations

from typing import Any
from dataclasses import field, dataclass

from figbridge.config.protocol import SESSION_DISCONNECTED


@dataclass(slots=True)
class SessionState:
    phase: str = SESSION_DISCONNECTED
    next_request_id: int = 0
    contexts: list[dict[str, Any]] = field(default_factory=list)
    target_context_id: int | None = None
    context_lost: bool = False


__all__ = ["SessionState"]
