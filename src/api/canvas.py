"""
どこで: `api.canvas`。
何を: 描画状態 `DrawState` とラスタバックエンドを束ねた具体的な描画面 `Canvas`（別名 `P5`）。
なぜ: 図形呼び出しを「パス生成 → 現在の変換 → ストローク/塗り」の 1 経路に通し、
      スタイル/モードの変更は状態の更新だけに留めるため。

描画規則:
- ストロークを先に、塗りを後に合成する（両方が有効なら両方）。
- 線幅は変換でスケールしない（デバイス座標の px）。
- `line()` は塗りを無視し、線幅 0 なら警告ログを出して何もしない。
- `point()` は線幅 1 かつ不透明なストローク色なら 1 画素を直接書き込み（AA なし・整数座標）、
  それ以外は直径 = 線幅の円をストローク色で塗る。両者の見た目は境界で不連続になる。
  直接書き込みの画素は床関数で決まり、(-1, 0) の座標は画面外として捨てる。
- `background()` は変換/スタイルを無視して全画素を置き換える。
"""

from __future__ import annotations

import logging
import math
from typing import Any

import numpy as np

from common import settings as _settings
from engine.color.convert import ColorLike, into_color
from engine.color.model import Color, ColorMode
from engine.core.affine import Affine2x3
from engine.core.path import Path
from engine.core.state import DrawState, RectMode, RectRounding
from engine.render.backend import RasterBackend
from engine.render.pixel_backend import PixelBackend
from engine.runtime.input import InputSnapshot
from engine.text.fonts import FontHandle, FontProperties, select_best_match
from shapes import (
    ellipse_path,
    line_path,
    point_path,
    quad_path,
    rect_path,
    triangle_path,
)
from util.utils import config_section

from .surface import Surface

logger = logging.getLogger(__name__)


def _color_arg(args: tuple[Any, ...]) -> ColorLike:
    """`fill(255, 0, 0)` と `fill((255, 0, 0))` の両方を受ける。"""
    if not args:
        raise TypeError("a color value is required")
    if len(args) == 1:
        return args[0]
    return tuple(args)


def _apply_text_defaults(state: DrawState) -> None:
    """`fonts.default_family` / `fonts.default_size` があれば文字の既定値に使う。"""
    cfg = config_section("fonts")
    family = cfg.get("default_family")
    if isinstance(family, str) and family.strip():
        state.text_family = family
    size = cfg.get("default_size")
    if isinstance(size, (int, float)) and not isinstance(size, bool) and size > 0:
        state.text_size = float(size)


class Canvas(Surface):
    """1 つのピクセルバッファに即時合成する描画面。"""

    def __init__(
        self,
        width: int,
        height: int,
        *,
        backend: RasterBackend | None = None,
        state: DrawState | None = None,
    ) -> None:
        self.backend = backend if backend is not None else PixelBackend(width, height)
        if state is None:
            state = DrawState()
            _apply_text_defaults(state)
        self.state = state
        self.input = InputSnapshot()
        self._font: FontHandle | None = None
        self._font_properties: FontProperties | None = None

    @property
    def width(self) -> int:
        return self.backend.width

    @property
    def height(self) -> int:
        return self.backend.height

    @property
    def frame_count(self) -> int:
        return self.state.frame_count

    # ---- 描画の中核 ----
    def draw_path(self, path: Path) -> None:
        """ローカル座標のパスを現在の変換とスタイルで描く。"""
        st = self.state
        if not st.has_stroke and not st.has_fill:
            return
        device = path.transform(st.transform)
        antialias = _settings.get().ANTIALIAS
        if st.has_stroke:
            self.backend.stroke(device, st.stroke_color, st.stroke_weight, antialias=antialias)
        if st.fill_color is not None:
            self.backend.fill(device, st.fill_color, antialias=antialias)

    def background(self, *args) -> None:
        self.backend.clear(self.color(*args))

    def ellipse(self, x: float, y: float, w: float, h: float) -> None:
        self.draw_path(ellipse_path(x, y, w, h))

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        st = self.state
        if not st.has_stroke:
            logger.warning("line() with stroke weight 0 draws nothing; call stroke_weight() first")
            return
        device = line_path(x1, y1, x2, y2).transform(st.transform)
        self.backend.stroke(
            device, st.stroke_color, st.stroke_weight, antialias=_settings.get().ANTIALIAS
        )

    def point(self, x: float, y: float) -> None:
        st = self.state
        if not st.has_stroke:
            logger.debug("point() with stroke weight 0 draws nothing")
            return
        color = st.stroke_color
        if st.stroke_weight == 1.0 and color.is_opaque:
            tx, ty = st.transform.apply_point(float(x), float(y))
            self.backend.put_pixel(math.floor(tx), math.floor(ty), color)
            return
        device = point_path(x, y, st.stroke_weight).transform(st.transform)
        self.backend.fill(device, color, antialias=_settings.get().ANTIALIAS)

    def rect(
        self, x: float, y: float, w: float, h: float, rounding: RectRounding | None = None
    ) -> None:
        self.draw_path(rect_path(x, y, w, h, self.state.rect_mode, rounding))

    def quad(self, x1, y1, x2, y2, x3, y3, x4, y4) -> None:
        self.draw_path(quad_path(x1, y1, x2, y2, x3, y3, x4, y4))

    def triangle(self, x1, y1, x2, y2, x3, y3) -> None:
        self.draw_path(triangle_path(x1, y1, x2, y2, x3, y3))

    # ---- 文字 ----
    def text_font(self, family: str, properties: FontProperties | None = None) -> None:
        """フォントを即時に解決する。見つからない/読めない場合は例外を伝播する。"""
        handle = select_best_match(family, properties)
        handle.load()
        self._font = handle
        self._font_properties = properties
        self.state.text_family = family

    def text_size(self, size: float) -> None:
        v = float(size)
        if not v > 0.0:
            raise ValueError(f"text size must be > 0, got {size!r}")
        self.state.text_size = v

    def text(self, s: str, x: float, y: float) -> None:
        """`(x, y)` をベースライン始点として塗り色で文字列を描く。"""
        st = self.state
        if st.fill_color is None:
            logger.debug("text() with no fill draws nothing")
            return
        if self._font is None:
            self._font = select_best_match(st.text_family, self._font_properties)
        self.backend.draw_text(
            self._font,
            st.text_size,
            str(s),
            (float(x), float(y)),
            st.fill_color,
            _settings.get().ANTIALIAS,
            transform=st.transform,
        )

    # ---- スタイル/モード ----
    def color(self, *args) -> Color:
        """現在の色モードで値を `Color` に変換する。"""
        return into_color(_color_arg(args), self.state.color_mode)

    def fill(self, *args) -> None:
        self.state.fill_color = self.color(*args)

    def no_fill(self) -> None:
        self.state.fill_color = None

    def stroke(self, *args) -> None:
        self.state.stroke_color = self.color(*args)

    def no_stroke(self) -> None:
        self.state.set_stroke_weight(0.0)

    def stroke_weight(self, weight: float) -> None:
        self.state.set_stroke_weight(weight)

    def rect_mode(self, mode: RectMode) -> None:
        if not isinstance(mode, RectMode):
            raise TypeError(f"rect mode must be a RectMode, got {mode!r}")
        self.state.rect_mode = mode

    def color_mode(self, mode: ColorMode) -> None:
        if not isinstance(mode, ColorMode):
            raise TypeError(f"color mode must be a ColorMode, got {mode!r}")
        self.state.color_mode = mode

    def frame_rate(self, fps: float | None = None) -> float:
        """引数ありで目標フレームレートを設定し、現在値を返す。"""
        if fps is not None:
            self.state.set_frame_rate(fps)
        return self.state.frame_rate

    # ---- 変換 ----
    def apply_matrix(self, matrix: Affine2x3 | None = None, *coeffs: float) -> None:
        """`apply_matrix(Affine2x3)` または `apply_matrix(m11, m12, m21, m22, m31, m32)`。"""
        if isinstance(matrix, Affine2x3) and not coeffs:
            tf = matrix
        else:
            values = ((matrix,) if matrix is not None else ()) + tuple(coeffs)
            if len(values) != 6:
                raise TypeError(f"apply_matrix expects an Affine2x3 or 6 numbers, got {values!r}")
            tf = Affine2x3(*(float(v) for v in values))
        self.state.push_transform(tf)

    def reset_matrix(self) -> None:
        self.state.reset_transform()

    # ---- 出力 ----
    def get_data(self) -> np.ndarray:
        return self.backend.get_data()


P5 = Canvas


__all__ = ["Canvas", "P5"]
