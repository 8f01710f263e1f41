"""Hex color conversion to the normalized channel triple the canvas expects."""

from __future__ import annotations

import re

from figbridge.errors import MarkupSyntaxError

CHANNEL_MAX = 255

_HEX_COLOR = re.compile(r"#[0-9a-fA-F]{6}")


def is_hex_color(value: str) -> bool:
    return _HEX_COLOR.fullmatch(value) is not None


def hex_to_rgb(value: str) -> tuple[float, float, float]:
    """`#RRGGBB` -> (r, g, b), each channel exactly `byte / 255`."""
    if not is_hex_color(value):
        raise MarkupSyntaxError(f'invalid color "{value}": expected #RRGGBB')
    r, g, b = (int(value[i : i + 2], 16) for i in (1, 3, 5))
    return r / CHANNEL_MAX, g / CHANNEL_MAX, b / CHANNEL_MAX


__all__ = ["CHANNEL_MAX", "hex_to_rgb", "is_hex_color"]
