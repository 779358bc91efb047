"""
どこで: `engine.render.pixel_backend`。
何を: 乗算済み ARGB32 のピクセルバッファを持つ CPU ラスタバックエンド `PixelBackend`。
なぜ: 描画状態から渡されたデバイス座標のパスを、外部 GPU 依存なしで即時にピクセルへ合成するため。

バッファ:
- `uint32` の `(height, width)`、各画素 `a<<24 | r<<16 | g<<8 | b`（乗算済み）。
- リトルエンディアンのバイト列としては BGRA 順になり、ウィンドウ層はそのまま転送できる。
- 初期値は全画素 0（透明）。
"""

from __future__ import annotations

import logging

import numpy as np

from common import settings as _settings
from engine.color.model import Color
from engine.core.affine import Affine2x3
from engine.core.path import Path
from engine.text.fonts import FontHandle
from engine.text.glyphs import text_path

from .backend import RasterBackend
from .raster import FILL_EVENODD, FILL_NONZERO, composite_over, coverage_mask
from .stroke import stroke_outline

logger = logging.getLogger(__name__)


class PixelBackend(RasterBackend):
    """numpy バッファ上の塗り/ストローク/画素書き込み。"""

    def __init__(self, width: int, height: int) -> None:
        w, h = int(width), int(height)
        if w <= 0 or h <= 0:
            raise ValueError(f"canvas size must be positive, got {width}x{height}")
        self.width = w
        self.height = h
        self._buf = np.zeros((h, w), dtype=np.uint32)

    @property
    def pixels(self) -> np.ndarray:
        """(height, width) の書き込み可能なバッファ本体。"""
        return self._buf

    def clear(self, color: Color) -> None:
        self._buf.fill(np.uint32(color.to_argb32()))

    def _fill_contours(
        self, contours, color: Color, *, antialias: bool, fill_rule: str
    ) -> None:
        if color.a == 0:
            return
        res = coverage_mask(
            contours, self.width, self.height, fill_rule=fill_rule, antialias=antialias
        )
        if res is None:
            return
        mask, ox, oy = res
        composite_over(self._buf, mask, ox, oy, color.premultiplied())

    def fill(
        self, path: Path, color: Color, *, antialias: bool = True, fill_rule: str = FILL_NONZERO
    ) -> None:
        contours = [pts for pts, _closed in path.flatten(_settings.get().FLATTEN_TOLERANCE)]
        self._fill_contours(contours, color, antialias=antialias, fill_rule=fill_rule)

    def stroke(self, path: Path, color: Color, width: float, *, antialias: bool = True) -> None:
        s = _settings.get()
        rings = stroke_outline(
            path.flatten(s.FLATTEN_TOLERANCE), width, miter_limit=s.STROKE_MITER_LIMIT
        )
        if not rings:
            return
        self._fill_contours(rings, color, antialias=antialias, fill_rule=FILL_EVENODD)

    def put_pixel(self, x: int, y: int, color: Color) -> None:
        xi, yi = int(x), int(y)
        if 0 <= xi < self.width and 0 <= yi < self.height:
            self._buf[yi, xi] = np.uint32(color.to_argb32())

    def draw_text(
        self,
        font: FontHandle,
        size: float,
        text: str,
        position: tuple[float, float],
        color: Color,
        antialias: bool = True,
        transform: Affine2x3 | None = None,
    ) -> None:
        s = _settings.get()
        path = text_path(font.load(), size, text, position, tolerance=s.FLATTEN_TOLERANCE)
        if not path:
            return
        if transform is not None:
            path = path.transform(transform)
        self.fill(path, color, antialias=antialias)

    def get_data(self) -> np.ndarray:
        view = self._buf.reshape(-1).view()
        view.flags.writeable = False
        return view

    def pixel(self, x: int, y: int) -> Color:
        """画素をストレート RGBA の `Color` として読み戻す（検査用）。"""
        v = int(self._buf[int(y), int(x)])
        a = (v >> 24) & 0xFF
        r, g, b = (v >> 16) & 0xFF, (v >> 8) & 0xFF, v & 0xFF
        if a == 0:
            return Color(0, 0, 0, 0)
        if a < 255:
            r, g, b = (min(255, (c * 255 + a // 2) // a) for c in (r, g, b))
        return Color(r, g, b, a)


__all__ = ["PixelBackend"]
