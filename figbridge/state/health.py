"""Health probe results."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class HealthStatus:
    # A session exists and its transport is open.
    connected: bool
    # Additionally, the scripting root object answered the existence probe.
    healthy: bool


__all__ = ["HealthStatus"]
