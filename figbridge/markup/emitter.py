"""Emit the canvas script for a parsed frame.

Statement order matters to the canvas runtime: fonts must finish loading
before any text content is assigned, and fill-width sizing is only accepted
on a child that already sits inside an auto-layout frame.
"""

from __future__ import annotations

from typing import Any

import orjson

from .colors import hex_to_rgb
from .nodes import FontSpec, TextNode, FrameNode

_INDENT = "  "
_FRAME_VAR = "frame"


def _js(value: Any) -> str:
    return orjson.dumps(value).decode("utf-8")


def _font(font: FontSpec) -> dict[str, str]:
    return {"family": font.family, "style": font.style}


def _solid_fill(color: str) -> list[dict[str, Any]]:
    r, g, b = hex_to_rgb(color)
    return [{"type": "SOLID", "color": {"r": r, "g": g, "b": b}}]


def _font_loads(fonts: tuple[FontSpec, ...]) -> list[str]:
    if not fonts:
        return []
    loads = ", ".join(f"figma.loadFontAsync({_js(_font(f))})" for f in fonts)
    return [f"await Promise.all([{loads}]);"]


def _frame_lines(frame: FrameNode) -> list[str]:
    v = _FRAME_VAR
    return [
        f"const {v} = figma.createFrame();",
        f"{v}.name = {_js(frame.name)};",
        f"{v}.resize({_js(frame.width)}, {_js(frame.height)});",
        f"{v}.x = {_js(frame.x)};",
        f"{v}.y = {_js(frame.y)};",
        f"{v}.cornerRadius = {_js(frame.corner_radius)};",
        f"{v}.fills = {_js(_solid_fill(frame.fill))};",
        f"{v}.layoutMode = {_js(frame.layout_mode)};",
        f"{v}.itemSpacing = {_js(frame.gap)};",
        f"{v}.paddingTop = {_js(frame.padding)};",
        f"{v}.paddingBottom = {_js(frame.padding)};",
        f"{v}.paddingLeft = {_js(frame.padding)};",
        f"{v}.paddingRight = {_js(frame.padding)};",
        f'{v}.primaryAxisSizingMode = "FIXED";',
        f'{v}.counterAxisSizingMode = "FIXED";',
        f"{v}.clipsContent = true;",
    ]


def _text_lines(index: int, node: TextNode) -> list[str]:
    v = f"text{index}"
    lines = [
        f"const {v} = figma.createText();",
        f"{v}.fontName = {_js(_font(node.font))};",
        f"{v}.fontSize = {_js(node.size)};",
        f"{v}.characters = {_js(node.content)};",
        f"{v}.fills = {_js(_solid_fill(node.color))};",
        f"{_FRAME_VAR}.appendChild({v});",
    ]
    if node.fill_width:
        lines += [
            f'{v}.layoutSizingHorizontal = "FILL";',
            f'{v}.textAutoResize = "HEIGHT";',
        ]
    return lines


def emit_script(frame: FrameNode) -> str:
    body = _font_loads(frame.fonts()) + _frame_lines(frame)
    for i, child in enumerate(frame.children):
        body += _text_lines(i, child)
    body.append(f"return {{ id: {_FRAME_VAR}.id, name: {_FRAME_VAR}.name }};")

    lines = ["(async function() {"]
    lines += [_INDENT + line for line in body]
    lines.append("})()")
    return "\n".join(lines)


__all__ = ["emit_script"]
