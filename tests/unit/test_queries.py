from __future__ import annotations

import pytest

from figbridge.scripting import queries
from figbridge.errors import MarkupSyntaxError


def test_node_ids_are_embedded_as_literals() -> None:
    script = queries.delete_node('1:2"); figma.root.remove(); ("')
    assert 'figma.getNodeById("1:2\\"); figma.root.remove(); (\\"")' in script
    assert "n.remove();" in script


def test_rename_escapes_name() -> None:
    script = queries.rename_node("1:2", 'Card "primary"')
    assert 'n.name = "Card \\"primary\\"";' in script


def test_set_fill_uses_exact_channels() -> None:
    script = queries.set_fill("1:2", "#18181b")
    assert f'"r":{24 / 255}' in script
    assert f'"b":{27 / 255}' in script


def test_set_fill_rejects_bad_color() -> None:
    with pytest.raises(MarkupSyntaxError):
        queries.set_fill("1:2", "teal")


def test_list_nodes_limit_is_clamped() -> None:
    assert "slice(0, 0)" in queries.list_nodes(-3)
    assert "slice(0, 50)" in queries.list_nodes()


def test_move_node() -> None:
    script = queries.move_node("1:2", 10, 20.5)
    assert "n.x = 10; n.y = 20.5;" in script


def test_read_only_scripts_are_expressions() -> None:
    for script in (queries.page_info(), queries.canvas_bounds(), queries.get_node("1:2")):
        assert script.startswith("(function() {")
        assert script.endswith("})()")


def test_resize_and_radius_guard_unsupported_nodes() -> None:
    assert "if (n.resize) n.resize(320, 180.5);" in queries.resize_node("1:2", 320, 180.5)
    assert "if ('cornerRadius' in n) n.cornerRadius = 8;" in queries.set_radius("1:2", 8)


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), True, "10"])
def test_numeric_arguments_must_be_finite_numbers(bad) -> None:
    with pytest.raises(ValueError):
        queries.move_node("1:2", bad, 0)
    with pytest.raises(ValueError):
        queries.resize_node("1:2", 10, bad)


def test_duplicate_offsets_clone() -> None:
    script = queries.duplicate_node("1:2")
    assert "clone.x = n.x + 50;" in script
    assert "clone.y = n.y + 0;" in script
    assert "if (!n) return null;" in script


def test_selection_accepts_single_id_or_many() -> None:
    assert '["1:2"].map(id => figma.getNodeById(id))' in queries.set_selection("1:2")
    assert '["1:2","3:4"].map(' in queries.set_selection(["1:2", "3:4"])
    assert queries.get_selection().startswith("figma.currentPage.selection.map(")


def test_node_tree_root_and_depth() -> None:
    page_tree = queries.get_node_tree()
    assert "const node = figma.currentPage;" in page_tree
    assert "if (depth > 10) return null;" in page_tree

    node_tree = queries.get_node_tree("1:2", max_depth=2)
    assert 'const node = figma.getNodeById("1:2");' in node_tree
    assert "if (depth > 2) return null;" in node_tree


def test_to_component_only_converts_frames() -> None:
    script = queries.to_component("1:2")
    assert '["1:2"].forEach(' in script
    assert "node.type === 'FRAME'" in script


def test_variables_filter_by_type() -> None:
    assert "getLocalVariables(null)" in queries.get_variables()
    assert 'getLocalVariables("COLOR")' in queries.get_variables("COLOR")
    with pytest.raises(ValueError):
        queries.get_variables("color'); figma.root.remove(); ('")
    assert queries.get_collections().startswith("figma.variables.getLocalVariableCollections()")


def test_arrange_columns() -> None:
    assert "const cols = nodes.length;" in queries.arrange_nodes()
    script = queries.arrange_nodes(gap=40, columns=3)
    assert "const cols = 3;" in script
    assert "y += rowHeight + 40;" in script
    assert "x += n.width + 40;" in script
