"""Canned canvas scripts."""

from . import queries

__all__ = ["queries"]
