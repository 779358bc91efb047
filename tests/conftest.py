"""共通フィクスチャ。

- 設定（環境変数）の既定化
- フォントカタログのキャッシュ破棄
- 小さな描画面と画素読み出しヘルパ
"""

from __future__ import annotations

from typing import Iterator

import pytest

from common import settings


@pytest.fixture(autouse=True)
def default_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """P5C_* を消して既定設定で実行する。"""
    for name in ("FLATTEN_TOLERANCE", "ANTIALIAS", "STROKE_MITER_LIMIT", "DEBUG_FONTS"):
        monkeypatch.delenv(f"{settings.ENV_PREFIX}{name}", raising=False)
    settings.reload_from_env()
    yield
    settings.reload_from_env()


@pytest.fixture()
def canvas():
    """400x400 の描画面（numba/shapely が無ければスキップ）。"""
    pytest.importorskip("numba")
    pytest.importorskip("shapely")
    from api.canvas import Canvas

    return Canvas(400, 400)


@pytest.fixture()
def small_canvas():
    pytest.importorskip("numba")
    pytest.importorskip("shapely")
    from api.canvas import Canvas

    return Canvas(40, 40)


@pytest.fixture()
def fresh_fonts() -> Iterator[None]:
    pytest.importorskip("fontTools")
    from engine.text.fonts import clear_font_cache

    clear_font_cache()
    yield
    clear_font_cache()


def build_test_font(
    path,
    *,
    family: str = "Boxy Test",
    style: str = "Regular",
    weight: int = 400,
    italic: bool = False,
):
    """四角形 1 つの "A" だけを持つ最小の TrueType フォントを書き出す。

    unitsPerEm=1000、"A" の輪郭は (100,0)-(600,700)、送り幅 700。
    """
    from fontTools.fontBuilder import FontBuilder
    from fontTools.pens.ttGlyphPen import TTGlyphPen

    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder([".notdef", "A"])
    fb.setupCharacterMap({ord("A"): "A"})
    pen = TTGlyphPen(None)
    pen.moveTo((100, 0))
    pen.lineTo((100, 700))
    pen.lineTo((600, 700))
    pen.lineTo((600, 0))
    pen.closePath()
    fb.setupGlyf({".notdef": TTGlyphPen(None).glyph(), "A": pen.glyph()})
    fb.setupHorizontalMetrics({".notdef": (500, 0), "A": (700, 100)})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": family, "styleName": style})
    fb.setupOS2(
        sTypoAscender=800,
        sTypoDescender=-200,
        usWinAscent=800,
        usWinDescent=200,
        usWeightClass=weight,
        fsSelection=0x01 if italic else 0x40,
    )
    fb.setupPost()
    fb.save(str(path))
    return path


@pytest.fixture()
def boxy_font_dir(tmp_path, monkeypatch: pytest.MonkeyPatch, fresh_fonts):
    """テスト用フォント 3 face だけを探索対象にした設定へ差し替える。"""
    import util.utils as uu

    build_test_font(tmp_path / "boxy-regular.ttf")
    build_test_font(tmp_path / "boxy-bold.ttf", style="Bold", weight=700)
    build_test_font(tmp_path / "boxy-italic.TTF", style="Italic", italic=True)
    cfg = {
        "fonts": {
            "search_dirs": [str(tmp_path)],
            "include_os": False,
            "generic": {"sans-serif": ["Missing Family", "Boxy Test"]},
        }
    }
    monkeypatch.setattr(uu, "load_config", lambda: cfg)
    return tmp_path
