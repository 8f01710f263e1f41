"""Chrome DevTools Protocol constants used by the transport."""

from __future__ import annotations

# Message keys
CDP_KEY_ID = "id"
CDP_KEY_METHOD = "method"
CDP_KEY_PARAMS = "params"
CDP_KEY_RESULT = "result"
CDP_KEY_ERROR = "error"

# Methods
CDP_RUNTIME_ENABLE = "Runtime.enable"
CDP_RUNTIME_EVALUATE = "Runtime.evaluate"

# Events
CDP_EVENT_CONTEXT_CREATED = "Runtime.executionContextCreated"
CDP_EVENT_CONTEXT_DESTROYED = "Runtime.executionContextDestroyed"
CDP_EVENT_CONTEXTS_CLEARED = "Runtime.executionContextsCleared"

# Cheap existence probe for the scripting root object.
ROOT_PROBE_EXPRESSION = 'typeof figma !== "undefined"'

# Session phases
SESSION_DISCONNECTED = "disconnected"
SESSION_CONNECTING = "connecting"
SESSION_OPEN = "open"
SESSION_CLOSED = "closed"

__all__ = [
    "CDP_EVENT_CONTEXTS_CLEARED",
    "CDP_EVENT_CONTEXT_CREATED",
    "CDP_EVENT_CONTEXT_DESTROYED",
    "CDP_KEY_ERROR",
    "CDP_KEY_ID",
    "CDP_KEY_METHOD",
    "CDP_KEY_PARAMS",
    "CDP_KEY_RESULT",
    "CDP_RUNTIME_ENABLE",
    "CDP_RUNTIME_EVALUATE",
    "ROOT_PROBE_EXPRESSION",
    "SESSION_CLOSED",
    "SESSION_CONNECTING",
    "SESSION_DISCONNECTED",
    "SESSION_OPEN",
]
