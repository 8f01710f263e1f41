"""Markup compiler defaults and grammar constants."""

from __future__ import annotations

ROOT_TAG = "Frame"
LEAF_TAG = "Text"

FONT_FAMILY = "Inter"

DEFAULT_FRAME_NAME = "Frame"
DEFAULT_FRAME_WIDTH = 320
DEFAULT_FRAME_HEIGHT = 200
DEFAULT_FRAME_FILL = "#ffffff"
DEFAULT_CORNER_RADIUS = 0
DEFAULT_GAP = 0
DEFAULT_PADDING = 0
DEFAULT_POSITION = 0

DEFAULT_FONT_SIZE = 14
DEFAULT_TEXT_COLOR = "#000000"
DEFAULT_FONT_STYLE = "Regular"

# Exactly these weights are recognized; anything else resolves to DEFAULT_FONT_STYLE.
WEIGHT_STYLES: dict[str, str] = {
    "regular": "Regular",
    "medium": "Medium",
    "bold": "Bold",
}

LAYOUT_HORIZONTAL = "HORIZONTAL"
LAYOUT_VERTICAL = "VERTICAL"
LAYOUT_ROW_VALUE = "row"

FILL_WIDTH_SENTINEL = "fill"

# Attribute aliases, first present wins.
FRAME_NAME_KEYS: tuple[str, ...] = ("name",)
FRAME_WIDTH_KEYS: tuple[str, ...] = ("w", "width")
FRAME_HEIGHT_KEYS: tuple[str, ...] = ("h", "height")
FRAME_FILL_KEYS: tuple[str, ...] = ("bg", "fill")
FRAME_RADIUS_KEYS: tuple[str, ...] = ("rounded", "radius")
FRAME_LAYOUT_KEYS: tuple[str, ...] = ("flex",)
FRAME_GAP_KEYS: tuple[str, ...] = ("gap",)
FRAME_PADDING_KEYS: tuple[str, ...] = ("p", "padding")
FRAME_X_KEYS: tuple[str, ...] = ("x",)
FRAME_Y_KEYS: tuple[str, ...] = ("y",)

TEXT_WEIGHT_KEYS: tuple[str, ...] = ("weight",)
TEXT_SIZE_KEYS: tuple[str, ...] = ("size",)
TEXT_COLOR_KEYS: tuple[str, ...] = ("color",)
TEXT_WIDTH_KEYS: tuple[str, ...] = ("w", "width")

__all__ = [
    "DEFAULT_CORNER_RADIUS",
    "DEFAULT_FONT_SIZE",
    "DEFAULT_FONT_STYLE",
    "DEFAULT_FRAME_FILL",
    "DEFAULT_FRAME_HEIGHT",
    "DEFAULT_FRAME_NAME",
    "DEFAULT_FRAME_WIDTH",
    "DEFAULT_GAP",
    "DEFAULT_PADDING",
    "DEFAULT_POSITION",
    "DEFAULT_TEXT_COLOR",
    "FILL_WIDTH_SENTINEL",
    "FONT_FAMILY",
    "FRAME_FILL_KEYS",
    "FRAME_GAP_KEYS",
    "FRAME_HEIGHT_KEYS",
    "FRAME_LAYOUT_KEYS",
    "FRAME_NAME_KEYS",
    "FRAME_PADDING_KEYS",
    "FRAME_RADIUS_KEYS",
    "FRAME_WIDTH_KEYS",
    "FRAME_X_KEYS",
    "FRAME_Y_KEYS",
    "LAYOUT_HORIZONTAL",
    "LAYOUT_ROW_VALUE",
    "LAYOUT_VERTICAL",
    "LEAF_TAG",
    "ROOT_TAG",
    "TEXT_COLOR_KEYS",
    "TEXT_SIZE_KEYS",
    "TEXT_WEIGHT_KEYS",
    "TEXT_WIDTH_KEYS",
    "WEIGHT_STYLES",
]
