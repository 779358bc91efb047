from __future__ import annotations

import pytest

pytest.importorskip("fontTools")

from conftest import build_test_font
from engine.core.path import Verb
from engine.text.glyphs import text_path


@pytest.fixture()
def boxy(tmp_path):
    from fontTools.ttLib import TTFont

    return TTFont(str(build_test_font(tmp_path / "boxy.ttf")))


@pytest.mark.smoke
def test_single_glyph_is_flipped_and_scaled(boxy) -> None:
    p = text_path(boxy, 100, "A", (10, 200))
    assert p.bounds() == pytest.approx((20.0, 130.0, 70.0, 200.0))
    assert p.verbs[0] is Verb.MOVE
    assert p.verbs[-1] is Verb.CLOSE


def test_advance_moves_pen(boxy) -> None:
    p = text_path(boxy, 100, "AA", (10, 200))
    assert p.bounds()[2] == pytest.approx(140.0)


def test_newline_returns_and_drops_line(boxy) -> None:
    p = text_path(boxy, 100, "A\nA", (10, 200))
    x0, y0, x1, y1 = p.bounds()
    assert (x0, x1) == pytest.approx((20.0, 70.0))
    assert y1 == pytest.approx(325.0)


def test_missing_glyph_and_empty_text(boxy) -> None:
    assert not text_path(boxy, 100, "Z", (0, 0))
    assert not text_path(boxy, 100, "", (0, 0))
    # .notdef の送り幅ぶん進む
    p = text_path(boxy, 100, "ZA", (0, 100))
    assert p.bounds()[0] == pytest.approx(60.0)


@pytest.mark.integration
def test_canvas_text_uses_fill_color(boxy_font_dir) -> None:
    pytest.importorskip("numba")
    pytest.importorskip("shapely")
    from api.canvas import Canvas
    from engine.color.model import Color, WHITE

    p5 = Canvas(100, 100)
    p5.background(255)
    p5.fill(255, 0, 0)
    p5.text_size(50)
    p5.text("A", 10, 60)  # sans-serif → Boxy Test
    assert p5.backend.pixel(25, 40) == Color(255, 0, 0)
    assert p5.backend.pixel(5, 40) == WHITE

    p5.background(255)
    p5.text_font("Boxy Test")
    p5.translate(20, 0)
    p5.text("A", 10, 60)
    assert p5.backend.pixel(25, 40) == WHITE
    assert p5.backend.pixel(45, 40) == Color(255, 0, 0)

    p5.no_fill()
    p5.background(255)
    p5.text("A", 10, 60)
    assert p5.backend.pixel(45, 40) == WHITE
