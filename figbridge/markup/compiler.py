"""Markup -> canvas script. Pure and deterministic; no partial script is ever returned."""

from __future__ import annotations

from collections.abc import Sequence

from figbridge.errors import MarkupSyntaxError

from .parser import parse_markup
from .emitter import emit_script


def compile_markup(markup: str) -> str:
    return emit_script(parse_markup(markup))


def compile_batch(markups: Sequence[str]) -> list[str]:
    """Compile every unit up front so a bad unit fails before anything runs."""
    scripts: list[str] = []
    for i, markup in enumerate(markups):
        try:
            scripts.append(compile_markup(markup))
        except MarkupSyntaxError as exc:
            raise MarkupSyntaxError(f"batch unit {i}: {exc.message}") from exc
    return scripts


__all__ = ["compile_batch", "compile_markup"]
