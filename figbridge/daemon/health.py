"""Session health probe: open transport plus a bounded root-object existence check."""

from __future__ import annotations

import asyncio
import logging

from figbridge.state import HealthStatus
from figbridge.transport import DebugSession
from figbridge.config.protocol import ROOT_PROBE_EXPRESSION
from figbridge.config.daemon import DEFAULT_HEALTH_TIMEOUT_S

logger = logging.getLogger(__name__)


async def probe_health(
    session: DebugSession | None,
    expression: str = ROOT_PROBE_EXPRESSION,
    timeout_s: float = DEFAULT_HEALTH_TIMEOUT_S,
) -> HealthStatus:
    if session is None:
        return HealthStatus(connected=False, healthy=False)

    connected = session.is_open
    if not connected or session.context_lost:
        return HealthStatus(connected=connected, healthy=False)

    try:
        value = await asyncio.wait_for(session.evaluate(expression), timeout=timeout_s)
    except Exception as exc:
        logger.debug("health: probe failed for %r: %s", session.title, exc)
        return HealthStatus(connected=session.is_open, healthy=False)
    return HealthStatus(connected=True, healthy=value is True)


__all__ = ["probe_health"]
