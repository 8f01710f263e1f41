"""Find the scripting context that exposes the target's root object."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from collections.abc import Sequence

from figbridge.errors import ProtocolError, ContextNotFoundError
from figbridge.config.protocol import CDP_KEY_RESULT, CDP_RUNTIME_EVALUATE

if TYPE_CHECKING:
    from .session import DebugSession

logger = logging.getLogger(__name__)


async def find_target_context(
    session: DebugSession,
    contexts: Sequence[dict[str, Any]],
    probe_expression: str,
) -> int:
    # Snapshot: contexts may still be appended while we probe.
    for ctx in list(contexts):
        ctx_id = ctx.get("id")
        if not isinstance(ctx_id, int):
            continue
        try:
            reply = await session.send(
                CDP_RUNTIME_EVALUATE,
                {"expression": probe_expression, "contextId": ctx_id, "returnByValue": True},
            )
        except ProtocolError as exc:
            logger.debug("discovery: probe failed in context %s: %s", ctx_id, exc)
            continue
        value = (reply.get(CDP_KEY_RESULT) or {}).get("value")
        if value is True:
            logger.debug("discovery: target context is %s (%r)", ctx_id, ctx.get("name"))
            return ctx_id

    raise ContextNotFoundError("could not find target context; try refreshing the document")


__all__ = ["find_target_context"]
