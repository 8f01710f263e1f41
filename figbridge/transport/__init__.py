"""CDP transport: directory lookup, debugging session and context discovery."""

from .connect import open_session
from .session import DebugSession
from .directory import list_pages, select_page
from .discovery import find_target_context

__all__ = [
    "DebugSession",
    "find_target_context",
    "list_pages",
    "open_session",
    "select_page",
]
