"""Markup syntax tree: one container frame holding ordered text leaves."""

from __future__ import annotations

from dataclasses import field, dataclass


@dataclass(frozen=True, slots=True)
class FontSpec:
    family: str
    style: str


@dataclass(frozen=True, slots=True)
class TextNode:
    content: str
    font: FontSpec
    size: float
    color: str
    fill_width: bool = False


@dataclass(frozen=True, slots=True)
class FrameNode:
    name: str
    width: float
    height: float
    x: float
    y: float
    fill: str
    corner_radius: float
    layout_mode: str
    gap: float
    padding: float
    children: tuple[TextNode, ...] = field(default_factory=tuple)

    def fonts(self) -> tuple[FontSpec, ...]:
        """Distinct fonts used by the leaves, in first-use order."""
        seen: dict[FontSpec, None] = {}
        for child in self.children:
            seen.setdefault(child.font, None)
        return tuple(seen)


__all__ = ["FontSpec", "FrameNode", "TextNode"]
