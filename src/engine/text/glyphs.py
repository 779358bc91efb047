"""
どこで: `engine.text.glyphs`。
何を: fontTools のグリフアウトラインを `Path`（move/line/quad/close）へ変換し、文字列をレイアウトする。
なぜ: 文字も図形と同じ塗りパイプライン（変換 → 平坦化 → カバレッジ）で描けるようにするため。

レイアウト:
- 送り幅は `hmtx`、倍率は `size / unitsPerEm`。
- フォント座標は y 上向きなので、`(s, 0, 0, -s, pen_x, baseline_y)` で画面座標へ反転する。
- `\n` は行頭へ戻して `1.25 * size` だけ下げる。
- 三次曲線（CFF）は `cu2qu` で二次曲線列に近似する。
"""

from __future__ import annotations

import logging

from fontTools.cu2qu import curve_to_quadratic
from fontTools.pens.basePen import BasePen
from fontTools.pens.transformPen import TransformPen
from fontTools.ttLib import TTFont

from engine.core.path import Path, PathBuilder

logger = logging.getLogger(__name__)

LINE_HEIGHT = 1.25


class PathPen(BasePen):
    """セグメントを `PathBuilder` へ流し込むペン。"""

    def __init__(self, glyph_set, builder: PathBuilder, max_err: float = 0.1) -> None:
        super().__init__(glyph_set)
        self.builder = builder
        self.max_err = float(max_err)

    def _moveTo(self, pt):
        self.builder.move_to(*pt)

    def _lineTo(self, pt):
        self.builder.line_to(*pt)

    def _qCurveToOne(self, pt1, pt2):
        self.builder.quad_to(pt1[0], pt1[1], pt2[0], pt2[1])

    def _curveToOne(self, pt1, pt2, pt3):
        start = self._getCurrentPoint()
        spline = curve_to_quadratic([start, pt1, pt2, pt3], self.max_err)
        self.qCurveTo(*spline[1:])

    def _closePath(self):
        self.builder.close()

    def _endPath(self):
        pass


def _glyph_name(font: TTFont, cmap: dict[int, str], ch: str) -> str:
    name = cmap.get(ord(ch))
    if name is None:
        logger.debug("glyph missing for %r; using .notdef", ch)
        return ".notdef"
    return name


def text_path(
    font: TTFont,
    size: float,
    text: str,
    position: tuple[float, float],
    *,
    tolerance: float = 0.1,
) -> Path:
    """`position` をベースライン始点として `text` の輪郭パスを返す（画面座標）。"""
    builder = PathBuilder()
    size = float(size)
    if not text or size <= 0.0:
        return builder.finish()

    units_per_em = float(font["head"].unitsPerEm)
    scale = size / units_per_em
    glyph_set = font.getGlyphSet()
    cmap = font.getBestCmap() or {}
    hmtx = font["hmtx"]

    x0, y0 = float(position[0]), float(position[1])
    pen_x, baseline = x0, y0
    pen = PathPen(glyph_set, builder, max_err=tolerance)
    for ch in text:
        if ch == "\n":
            pen_x = x0
            baseline += LINE_HEIGHT * size
            continue
        name = _glyph_name(font, cmap, ch)
        if name not in glyph_set:
            continue
        glyph_set[name].draw(TransformPen(pen, (scale, 0, 0, -scale, pen_x, baseline)))
        advance, _lsb = hmtx[name]
        pen_x += advance * scale
    return builder.finish()


__all__ = ["PathPen", "text_path", "LINE_HEIGHT"]
