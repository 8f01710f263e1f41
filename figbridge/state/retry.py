"""Retry loop bookkeeping (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RetryAttempt:
    index: int
    previous_error: BaseException | None = None
    forced_reconnect: bool = False


__all__ = ["RetryAttempt"]
