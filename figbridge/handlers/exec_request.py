"""`POST /exec` body parsing/validation into an executable action."""

from __future__ import annotations

from typing import Any

import orjson

from figbridge.errors import InvalidRequestError
from figbridge.daemon.actions import Action, EvalAction, RenderAction, RenderBatchAction
from figbridge.config.daemon import (
    EXEC_KEY_JSX,
    ACTION_EVAL,
    EXEC_KEY_CODE,
    ACTION_RENDER,
    EXEC_KEY_ACTION,
    EXEC_KEY_JSX_ARRAY,
    ACTION_RENDER_BATCH,
)


def _require_str(body: dict[str, Any], key: str) -> str:
    value = body.get(key)
    if not isinstance(value, str) or not value.strip():
        raise InvalidRequestError(f"'{key}' must be a non-empty string")
    return value


def _require_str_list(body: dict[str, Any], key: str) -> list[str]:
    value = body.get(key)
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise InvalidRequestError(f"'{key}' must be an array of strings")
    return value


def parse_exec_request(raw: bytes | str) -> Action:
    try:
        body = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise InvalidRequestError(f"invalid JSON: {exc}") from exc

    if not isinstance(body, dict):
        raise InvalidRequestError("request body must be a JSON object")

    action = body.get(EXEC_KEY_ACTION)
    if not isinstance(action, str) or not action.strip():
        raise InvalidRequestError(f"request missing non-empty '{EXEC_KEY_ACTION}'")

    action = action.strip()
    if action == ACTION_EVAL:
        return EvalAction(code=_require_str(body, EXEC_KEY_CODE))
    if action == ACTION_RENDER:
        return RenderAction.from_markup(_require_str(body, EXEC_KEY_JSX))
    if action == ACTION_RENDER_BATCH:
        return RenderBatchAction.from_markups(_require_str_list(body, EXEC_KEY_JSX_ARRAY))
    raise InvalidRequestError(f"Unknown action: {action}")


__all__ = ["parse_exec_request"]
