from __future__ import annotations

import pytest

from figbridge.errors import MarkupSyntaxError
from figbridge.markup import compile_batch, compile_markup

from tests.utils.stub_canvas import StubCanvas

CARD = '<Frame name="Card" w={240} bg="#ffffff"><Text size={14} color="#18181b">Hi</Text></Frame>'


def test_compile_is_deterministic() -> None:
    assert compile_markup(CARD) == compile_markup(CARD)


def test_card_renders_on_stub_canvas() -> None:
    canvas = StubCanvas()
    result = canvas.run(compile_markup(CARD))

    (frame,) = canvas.frames
    assert result == {"id": frame["id"], "name": "Card"}
    assert frame["name"] == "Card"
    assert frame["width"] == 240
    assert frame["height"] == 200
    assert frame["fills"][0]["color"] == {"r": 1.0, "g": 1.0, "b": 1.0}
    assert frame["primaryAxisSizingMode"] == "FIXED"
    assert frame["counterAxisSizingMode"] == "FIXED"
    assert frame["clipsContent"] is True

    (text,) = frame["children"]
    assert text["characters"] == "Hi"
    assert text["fontSize"] == 14
    assert text["fills"][0]["color"] == {"r": 24 / 255, "g": 24 / 255, "b": 27 / 255}


def test_fonts_are_loaded_once_before_any_node() -> None:
    script = compile_markup(
        '<Frame><Text weight="bold">a</Text><Text weight="bold">b</Text><Text>c</Text></Frame>'
    )
    assert script.count('figma.loadFontAsync({"family":"Inter","style":"Bold"})') == 1
    assert script.count('figma.loadFontAsync({"family":"Inter","style":"Regular"})') == 1
    assert script.count("await Promise.all(") == 1
    assert script.index("await Promise.all(") < script.index("figma.createFrame()")

    canvas = StubCanvas()
    canvas.run(script)
    assert canvas.loaded_fonts == [("Inter", "Bold"), ("Inter", "Regular")]


def test_unknown_weight_falls_back_to_regular() -> None:
    script = compile_markup('<Frame><Text weight="ultra">x</Text></Frame>')
    assert '"style":"Regular"' in script
    assert '"style":"ultra"' not in script


def test_frame_without_text_skips_font_loading() -> None:
    script = compile_markup("<Frame></Frame>")
    assert "loadFontAsync" not in script
    assert StubCanvas().run(script)["name"] == "Frame"


def test_fill_width_is_applied_after_append() -> None:
    script = compile_markup('<Frame flex="row"><Text w="fill">wide</Text></Frame>')
    assert script.index("frame.appendChild(text0);") < script.index('text0.layoutSizingHorizontal = "FILL";')

    canvas = StubCanvas()
    canvas.run(script)
    (text,) = canvas.frames[0]["children"]
    assert text["layoutSizingHorizontal"] == "FILL"
    assert text["textAutoResize"] == "HEIGHT"


def test_text_content_is_escaped() -> None:
    content = 'He said "hi"; then \\ left'
    canvas = StubCanvas()
    canvas.run(compile_markup(f"<Frame><Text>{content}</Text></Frame>"))
    assert canvas.frames[0]["children"][0]["characters"] == content


def test_missing_root_never_returns_a_script() -> None:
    with pytest.raises(MarkupSyntaxError):
        compile_markup('<Text size={14}>Hi</Text>')


def test_batch_compiles_each_unit() -> None:
    scripts = compile_batch([CARD, "<Frame></Frame>"])
    assert scripts == [compile_markup(CARD), compile_markup("<Frame></Frame>")]


def test_batch_reports_failing_unit_index() -> None:
    with pytest.raises(MarkupSyntaxError, match="batch unit 1"):
        compile_batch([CARD, "<Frame>", CARD])


@pytest.mark.parametrize("size", ["w={99999999999999999999}", "x={18446744073709551616}"])
def test_oversized_number_is_a_syntax_error(size: str) -> None:
    with pytest.raises(MarkupSyntaxError):
        compile_markup(f"<Frame {size}></Frame>")
    with pytest.raises(MarkupSyntaxError, match="batch unit 0"):
        compile_batch([f"<Frame {size}></Frame>"])
