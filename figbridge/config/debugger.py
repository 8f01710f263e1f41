"""Debugging endpoint configuration (env names and defaults)."""

from __future__ import annotations

ENV_DEBUG_HOST = "FIGMA_DEBUG_HOST"
ENV_DEBUG_PORT = "FIGMA_DEBUG_PORT"
ENV_URL_PATTERNS = "FIGMA_URL_PATTERNS"
ENV_TARGET_SELECTOR = "FIGMA_TARGET_SELECTOR"
ENV_CONNECT_TIMEOUT_S = "FIGMA_CONNECT_TIMEOUT_S"
ENV_CONTEXT_SETTLE_S = "FIGMA_CONTEXT_SETTLE_S"
ENV_DIRECTORY_TIMEOUT_S = "FIGMA_DIRECTORY_TIMEOUT_S"

DEFAULT_DEBUG_HOST = "127.0.0.1"
DEFAULT_DEBUG_PORT = 9222

# Open documents whose URL contains one of these are eligible targets. The
# trailing slash keeps feed, home and recent tabs ("/files/recent") out.
DEFAULT_URL_PATTERNS: tuple[str, ...] = ("figma.com/design/", "figma.com/file/")

DEFAULT_CONNECT_TIMEOUT_S = 10.0

# Context-created events arrive asynchronously after Runtime.enable and the
# protocol has no "contexts settled" signal, so discovery waits this long.
DEFAULT_CONTEXT_SETTLE_S = 1.5

DEFAULT_DIRECTORY_TIMEOUT_S = 2.0

DIRECTORY_PATH = "/json"

__all__ = [
    "DEFAULT_CONNECT_TIMEOUT_S",
    "DEFAULT_CONTEXT_SETTLE_S",
    "DEFAULT_DEBUG_HOST",
    "DEFAULT_DEBUG_PORT",
    "DEFAULT_DIRECTORY_TIMEOUT_S",
    "DEFAULT_URL_PATTERNS",
    "DIRECTORY_PATH",
    "ENV_CONNECT_TIMEOUT_S",
    "ENV_CONTEXT_SETTLE_S",
    "ENV_DEBUG_HOST",
    "ENV_DEBUG_PORT",
    "ENV_DIRECTORY_TIMEOUT_S",
    "ENV_TARGET_SELECTOR",
    "ENV_URL_PATTERNS",
]
