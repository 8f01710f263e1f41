"""Markup grammar: a single `<Frame ...>` root holding zero or more `<Text ...>` leaves.

This is deliberately not XML. Attribute values may not contain `>`, text
content may not contain `<`, and no entity decoding happens.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from figbridge.errors import MarkupSyntaxError
from figbridge.config.markup import (
    LEAF_TAG,
    ROOT_TAG,
    DEFAULT_GAP,
    FONT_FAMILY,
    FRAME_X_KEYS,
    FRAME_Y_KEYS,
    WEIGHT_STYLES,
    FRAME_GAP_KEYS,
    TEXT_SIZE_KEYS,
    FRAME_FILL_KEYS,
    FRAME_NAME_KEYS,
    LAYOUT_VERTICAL,
    TEXT_COLOR_KEYS,
    TEXT_WIDTH_KEYS,
    DEFAULT_PADDING,
    DEFAULT_POSITION,
    FRAME_WIDTH_KEYS,
    LAYOUT_ROW_VALUE,
    TEXT_WEIGHT_KEYS,
    DEFAULT_FONT_SIZE,
    FRAME_HEIGHT_KEYS,
    FRAME_LAYOUT_KEYS,
    FRAME_RADIUS_KEYS,
    LAYOUT_HORIZONTAL,
    DEFAULT_FONT_STYLE,
    DEFAULT_FRAME_FILL,
    DEFAULT_FRAME_NAME,
    DEFAULT_TEXT_COLOR,
    FRAME_PADDING_KEYS,
    DEFAULT_FRAME_WIDTH,
    FILL_WIDTH_SENTINEL,
    DEFAULT_FRAME_HEIGHT,
    DEFAULT_CORNER_RADIUS,
)

from .nodes import FontSpec, TextNode, FrameNode
from .attributes import read_text, read_color, read_number, parse_attributes

_ROOT = re.compile(
    rf"<{ROOT_TAG}(?P<attrs>(?:\s[^>]*)?)>(?P<body>.*)</{ROOT_TAG}>",
    re.DOTALL,
)
_LEAF = re.compile(rf"<{LEAF_TAG}(?P<attrs>(?:\s[^>]*)?)>(?P<content>[^<]*)</{LEAF_TAG}>")
_WHITESPACE = re.compile(r"\s*")

_SNIPPET_LEN = 40


def _snippet(text: str, pos: int) -> str:
    chunk = text[pos : pos + _SNIPPET_LEN]
    return chunk + ("..." if len(text) - pos > _SNIPPET_LEN else "")


def _parse_leaf(attrs: Mapping[str, str], content: str) -> TextNode:
    weight = read_text(attrs, TEXT_WEIGHT_KEYS, "").strip().lower()
    return TextNode(
        content=content,
        font=FontSpec(FONT_FAMILY, WEIGHT_STYLES.get(weight, DEFAULT_FONT_STYLE)),
        size=read_number(attrs, TEXT_SIZE_KEYS, DEFAULT_FONT_SIZE),
        color=read_color(attrs, TEXT_COLOR_KEYS, DEFAULT_TEXT_COLOR),
        fill_width=read_text(attrs, TEXT_WIDTH_KEYS, "").strip() == FILL_WIDTH_SENTINEL,
    )


def _parse_children(body: str) -> tuple[TextNode, ...]:
    children: list[TextNode] = []
    pos = _WHITESPACE.match(body).end()
    while pos < len(body):
        match = _LEAF.match(body, pos)
        if match is None:
            raise MarkupSyntaxError(
                f"expected <{LEAF_TAG}>...</{LEAF_TAG}> inside <{ROOT_TAG}>, found {_snippet(body, pos)!r}"
            )
        children.append(_parse_leaf(parse_attributes(match.group("attrs")), match.group("content")))
        pos = _WHITESPACE.match(body, match.end()).end()
    return tuple(children)


def _parse_frame(attrs: Mapping[str, str], children: tuple[TextNode, ...]) -> FrameNode:
    width = read_number(attrs, FRAME_WIDTH_KEYS, DEFAULT_FRAME_WIDTH)
    height = read_number(attrs, FRAME_HEIGHT_KEYS, DEFAULT_FRAME_HEIGHT)
    if width <= 0 or height <= 0:
        raise MarkupSyntaxError(f"<{ROOT_TAG}> size must be positive, got {width}x{height}")

    layout = read_text(attrs, FRAME_LAYOUT_KEYS, "").strip()
    return FrameNode(
        name=read_text(attrs, FRAME_NAME_KEYS, DEFAULT_FRAME_NAME),
        width=width,
        height=height,
        x=read_number(attrs, FRAME_X_KEYS, DEFAULT_POSITION),
        y=read_number(attrs, FRAME_Y_KEYS, DEFAULT_POSITION),
        fill=read_color(attrs, FRAME_FILL_KEYS, DEFAULT_FRAME_FILL),
        corner_radius=read_number(attrs, FRAME_RADIUS_KEYS, DEFAULT_CORNER_RADIUS),
        layout_mode=LAYOUT_HORIZONTAL if layout == LAYOUT_ROW_VALUE else LAYOUT_VERTICAL,
        gap=read_number(attrs, FRAME_GAP_KEYS, DEFAULT_GAP),
        padding=read_number(attrs, FRAME_PADDING_KEYS, DEFAULT_PADDING),
        children=children,
    )


def parse_markup(markup: str) -> FrameNode:
    if not isinstance(markup, str):
        raise MarkupSyntaxError(f"markup must be a string, got {type(markup).__name__}")

    match = _ROOT.fullmatch(markup.strip())
    if match is None:
        raise MarkupSyntaxError(f"markup must be a single <{ROOT_TAG} ...>...</{ROOT_TAG}> element")

    children = _parse_children(match.group("body"))
    return _parse_frame(parse_attributes(match.group("attrs")), children)


__all__ = ["parse_markup"]
