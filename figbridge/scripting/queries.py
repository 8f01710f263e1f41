"""Canned canvas scripts for common inspection and node edits.

Every caller-provided value is embedded as an orjson literal, never spliced
as raw text. Node edits answer `{success: false, error: "Node not found"}`
instead of throwing when the id is unknown.
"""

from __future__ import annotations

import math
from typing import Any
from collections.abc import Sequence

import orjson

from figbridge.markup.colors import hex_to_rgb

DEFAULT_LIST_LIMIT = 50
DEFAULT_TREE_DEPTH = 10
DEFAULT_DUPLICATE_OFFSET = (50, 0)
DEFAULT_ARRANGE_GAP = 100

VARIABLE_TYPES = frozenset({"BOOLEAN", "COLOR", "FLOAT", "STRING"})


def _js(value: Any) -> str:
    return orjson.dumps(value).decode("utf-8")


def _number(value: float, name: str) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValueError(f"{name} must be a finite number, got {value!r}")
    return _js(value)


def _node_script(node_id: str, body: str) -> str:
    return "\n".join(
        [
            "(function() {",
            f"  const n = figma.getNodeById({_js(node_id)});",
            "  if (!n) return { success: false, error: 'Node not found' };",
            f"  {body}",
            "})()",
        ]
    )


def page_info() -> str:
    return (
        "(function() {\n"
        "  return {\n"
        "    name: figma.currentPage.name,\n"
        "    id: figma.currentPage.id,\n"
        "    childCount: figma.currentPage.children.length,\n"
        "    fileKey: figma.fileKey\n"
        "  };\n"
        "})()"
    )


def canvas_bounds() -> str:
    """Bounding box of the current page's top-level nodes (for placing new frames)."""
    return (
        "(function() {\n"
        "  const children = figma.currentPage.children;\n"
        "  if (children.length === 0) return { minX: 0, minY: 0, maxX: 0, maxY: 0, isEmpty: true };\n"
        "  let minX = Infinity, minY = Infinity, maxX = -Infinity, maxY = -Infinity;\n"
        "  children.forEach(n => {\n"
        "    minX = Math.min(minX, n.x);\n"
        "    minY = Math.min(minY, n.y);\n"
        "    maxX = Math.max(maxX, n.x + n.width);\n"
        "    maxY = Math.max(maxY, n.y + n.height);\n"
        "  });\n"
        "  return { minX, minY, maxX, maxY, isEmpty: false };\n"
        "})()"
    )


def list_nodes(limit: int = DEFAULT_LIST_LIMIT) -> str:
    limit = max(0, int(limit))
    return (
        f"figma.currentPage.children.slice(0, {_js(limit)}).map(function(n) {{\n"
        "  return {\n"
        "    id: n.id,\n"
        "    type: n.type,\n"
        "    name: n.name || '',\n"
        "    x: Math.round(n.x),\n"
        "    y: Math.round(n.y),\n"
        "    width: Math.round(n.width),\n"
        "    height: Math.round(n.height)\n"
        "  };\n"
        "})"
    )


def get_node(node_id: str) -> str:
    return "\n".join(
        [
            "(function() {",
            f"  const n = figma.getNodeById({_js(node_id)});",
            "  if (!n) return null;",
            "  return { id: n.id, type: n.type, name: n.name || '', x: n.x, y: n.y,"
            " width: n.width, height: n.height, visible: n.visible, opacity: n.opacity };",
            "})()",
        ]
    )


def delete_node(node_id: str) -> str:
    return _node_script(node_id, "n.remove(); return { success: true };")


def move_node(node_id: str, x: float, y: float) -> str:
    body = f"n.x = {_number(x, 'x')}; n.y = {_number(y, 'y')};"
    return _node_script(node_id, f"{body} return {{ success: true, x: n.x, y: n.y }};")


def rename_node(node_id: str, name: str) -> str:
    return _node_script(node_id, f"n.name = {_js(name)}; return {{ success: true, name: n.name }};")


def set_fill(node_id: str, color: str) -> str:
    r, g, b = hex_to_rgb(color)
    paint = [{"type": "SOLID", "color": {"r": r, "g": g, "b": b}}]
    return _node_script(node_id, f"n.fills = {_js(paint)}; return {{ success: true }};")


def resize_node(node_id: str, width: float, height: float) -> str:
    w, h = _number(width, "width"), _number(height, "height")
    return _node_script(
        node_id, f"if (n.resize) n.resize({w}, {h}); return {{ success: true, width: n.width, height: n.height }};"
    )


def set_radius(node_id: str, radius: float) -> str:
    r = _number(radius, "radius")
    return _node_script(node_id, f"if ('cornerRadius' in n) n.cornerRadius = {r}; return {{ success: true }};")


def duplicate_node(
    node_id: str,
    offset_x: float = DEFAULT_DUPLICATE_OFFSET[0],
    offset_y: float = DEFAULT_DUPLICATE_OFFSET[1],
) -> str:
    """Clone a node next to the original; answers `null` for an unknown id."""
    dx, dy = _number(offset_x, "offset_x"), _number(offset_y, "offset_y")
    return "\n".join(
        [
            "(function() {",
            f"  const n = figma.getNodeById({_js(node_id)});",
            "  if (!n) return null;",
            "  const clone = n.clone();",
            f"  clone.x = n.x + {dx};",
            f"  clone.y = n.y + {dy};",
            "  return { id: clone.id, name: clone.name, x: clone.x, y: clone.y };",
            "})()",
        ]
    )


def get_selection() -> str:
    return "figma.currentPage.selection.map(n => ({ id: n.id, type: n.type, name: n.name || '' }))"


def set_selection(node_ids: str | Sequence[str]) -> str:
    """Select the given nodes; unknown ids are skipped and the selected ids returned."""
    ids = [node_ids] if isinstance(node_ids, str) else list(node_ids)
    return "\n".join(
        [
            "(function() {",
            f"  const nodes = {_js(ids)}.map(id => figma.getNodeById(id)).filter(n => n);",
            "  figma.currentPage.selection = nodes;",
            "  return nodes.map(n => n.id);",
            "})()",
        ]
    )


def get_node_tree(node_id: str | None = None, max_depth: int = DEFAULT_TREE_DEPTH) -> str:
    """Recursive `{id, type, name, x, y, width, height, children}` from a node or the current page.

    Nodes deeper than `max_depth` are dropped.
    """
    root = f"figma.getNodeById({_js(node_id)})" if node_id else "figma.currentPage"
    depth = max(0, int(max_depth))
    return "\n".join(
        [
            "(function() {",
            "  function buildTree(node, depth) {",
            f"    if (depth > {depth}) return null;",
            "    const result = {",
            "      id: node.id,",
            "      type: node.type,",
            "      name: node.name || '',",
            "      x: Math.round(node.x || 0),",
            "      y: Math.round(node.y || 0),",
            "      width: Math.round(node.width || 0),",
            "      height: Math.round(node.height || 0)",
            "    };",
            "    if (node.children) {",
            "      result.children = node.children.map(c => buildTree(c, depth + 1)).filter(c => c);",
            "    }",
            "    return result;",
            "  }",
            f"  const node = {root};",
            "  if (!node) return null;",
            "  return buildTree(node, 0);",
            "})()",
        ]
    )


def to_component(node_ids: str | Sequence[str]) -> str:
    ids = [node_ids] if isinstance(node_ids, str) else list(node_ids)
    return "\n".join(
        [
            "(function() {",
            "  const results = [];",
            f"  {_js(ids)}.forEach(id => {{",
            "    const node = figma.getNodeById(id);",
            "    if (node && node.type === 'FRAME') {",
            "      const component = figma.createComponentFromNode(node);",
            "      results.push({ id: component.id, name: component.name });",
            "    }",
            "  });",
            "  return results;",
            "})()",
        ]
    )


def get_variables(variable_type: str | None = None) -> str:
    if variable_type is not None and variable_type not in VARIABLE_TYPES:
        raise ValueError(f"unknown variable type {variable_type!r}; expected one of {sorted(VARIABLE_TYPES)}")
    return (
        f"figma.variables.getLocalVariables({_js(variable_type)})"
        ".map(v => ({ id: v.id, name: v.name, resolvedType: v.resolvedType }))"
    )


def get_collections() -> str:
    return (
        "figma.variables.getLocalVariableCollections()"
        ".map(c => ({ id: c.id, name: c.name, modes: c.modes, variableIds: c.variableIds }))"
    )


def file_key() -> str:
    return "figma.fileKey"


def arrange_nodes(gap: float = DEFAULT_ARRANGE_GAP, columns: int | None = None) -> str:
    """Lay top-level frames and components out in a grid.

    Without `columns` everything goes on one row.
    """
    spacing = _number(gap, "gap")
    cols = "nodes.length" if not columns else _js(max(1, int(columns)))
    return "\n".join(
        [
            "(function() {",
            "  const nodes = figma.currentPage.children.filter(n => n.type === 'FRAME' || n.type === 'COMPONENT');",
            "  if (nodes.length === 0) return { arranged: 0 };",
            f"  const cols = {cols};",
            "  let x = 0, y = 0, rowHeight = 0, col = 0;",
            "  nodes.forEach(n => {",
            "    n.x = x;",
            "    n.y = y;",
            "    rowHeight = Math.max(rowHeight, n.height);",
            "    col++;",
            "    if (col >= cols) {",
            "      col = 0;",
            "      x = 0;",
            f"      y += rowHeight + {spacing};",
            "      rowHeight = 0;",
            "    } else {",
            f"      x += n.width + {spacing};",
            "    }",
            "  });",
            "  return { arranged: nodes.length };",
            "})()",
        ]
    )


__all__ = [
    "DEFAULT_ARRANGE_GAP",
    "DEFAULT_DUPLICATE_OFFSET",
    "DEFAULT_LIST_LIMIT",
    "DEFAULT_TREE_DEPTH",
    "VARIABLE_TYPES",
    "arrange_nodes",
    "canvas_bounds",
    "delete_node",
    "duplicate_node",
    "file_key",
    "get_collections",
    "get_node",
    "get_node_tree",
    "get_selection",
    "get_variables",
    "list_nodes",
    "move_node",
    "page_info",
    "rename_node",
    "resize_node",
    "set_fill",
    "set_radius",
    "set_selection",
    "to_component",
]
