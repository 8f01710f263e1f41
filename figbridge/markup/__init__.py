"""Declarative markup compiler (parse -> syntax tree -> canvas script)."""

from .parser import parse_markup
from .colors import hex_to_rgb
from .emitter import emit_script
from .nodes import FontSpec, TextNode, FrameNode
from .compiler import compile_batch, compile_markup

__all__ = [
    "FontSpec",
    "FrameNode",
    "TextNode",
    "compile_batch",
    "compile_markup",
    "emit_script",
    "hex_to_rgb",
    "parse_markup",
]
