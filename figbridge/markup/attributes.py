"""Attribute list parsing and typed attribute readers."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

from figbridge.errors import MarkupSyntaxError

from .colors import is_hex_color

# name="literal" or name={token}; anything else in the list is skipped.
_ATTRIBUTE = re.compile(r'(\w+)=(?:"([^"]*)"|\{([^}]*)\})')
_NUMBER = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")

# Canvas coordinates are JS doubles; beyond this integers lose precision.
MAX_ABS_NUMBER = 2**53


def parse_attributes(raw: str) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for match in _ATTRIBUTE.finditer(raw):
        name, quoted, braced = match.groups()
        attrs[name] = quoted if quoted is not None else braced.strip()
    return attrs


def _lookup(attrs: Mapping[str, str], keys: Sequence[str]) -> tuple[str, str] | None:
    for key in keys:
        if key in attrs:
            return key, attrs[key]
    return None


def read_text(attrs: Mapping[str, str], keys: Sequence[str], default: str) -> str:
    found = _lookup(attrs, keys)
    return found[1] if found is not None else default


def read_number(attrs: Mapping[str, str], keys: Sequence[str], default: int | float) -> int | float:
    found = _lookup(attrs, keys)
    if found is None:
        return default
    key, raw = found
    value = raw.strip()
    if not _NUMBER.fullmatch(value):
        raise MarkupSyntaxError(f'attribute "{key}" expects a number, got "{raw}"')
    number: int | float = float(value) if "." in value else int(value)
    if abs(number) > MAX_ABS_NUMBER:
        raise MarkupSyntaxError(f'attribute "{key}" is out of range, got "{raw}"')
    if isinstance(number, float) and number.is_integer():
        return int(number)
    return number


def read_color(attrs: Mapping[str, str], keys: Sequence[str], default: str) -> str:
    found = _lookup(attrs, keys)
    if found is None:
        return default
    key, raw = found
    value = raw.strip()
    if not is_hex_color(value):
        raise MarkupSyntaxError(f'attribute "{key}" expects a #RRGGBB color, got "{raw}"')
    return value.lower()


__all__ = ["MAX_ABS_NUMBER", "parse_attributes", "read_color", "read_number", "read_text"]
