"""Session manager, retry policy and executable actions."""

from .health import probe_health
from .retry import run_with_retry
from .manager import SessionManager
from .actions import Action, EvalAction, RenderAction, RenderBatchAction

__all__ = [
    "Action",
    "EvalAction",
    "RenderAction",
    "RenderBatchAction",
    "SessionManager",
    "probe_health",
    "run_with_retry",
]
