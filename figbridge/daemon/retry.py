"""Bounded retry loop with a forced-reconnect hook between attempts."""

from __future__ import annotations

import asyncio
import logging
from typing import TypeVar
from collections.abc import Callable, Awaitable

from figbridge.state import RetryAttempt
from figbridge.errors import is_retryable

logger = logging.getLogger(__name__)

T = TypeVar("T")

SleepFn = Callable[[float], Awaitable[None]]
OnRetryFn = Callable[[BaseException, RetryAttempt], Awaitable[None]]


async def run_with_retry(
    fn: Callable[[RetryAttempt], Awaitable[T]],
    *,
    max_retries: int,
    delay_s: float,
    on_retry: OnRetryFn | None = None,
    sleep: SleepFn = asyncio.sleep,
) -> T:
    """Run `fn` for attempts 0..max_retries inclusive.

    Non-retryable errors propagate immediately. When every attempt fails, the
    error of the last attempt is raised unchanged (not an aggregate).
    """
    last_index = max(0, int(max_retries))
    attempt = RetryAttempt(index=0)
    while True:
        try:
            return await fn(attempt)
        except Exception as exc:
            if not is_retryable(exc) or attempt.index >= last_index:
                raise
            logger.warning("retry: attempt %d/%d failed: %s", attempt.index + 1, last_index + 1, exc)
            if on_retry is not None:
                await on_retry(exc, attempt)
            if delay_s > 0:
                await sleep(delay_s)
            attempt = RetryAttempt(
                index=attempt.index + 1,
                previous_error=exc,
                forced_reconnect=on_retry is not None,
            )


__all__ = ["run_with_retry"]
