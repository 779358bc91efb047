"""
どこで: `engine.render.stroke`。
何を: 平坦化済みの輪郭を Shapely の `buffer` で線幅ぶん膨らませ、塗り用のリング列へ変換する。
なぜ: ストロークを「輪郭ポリゴンの塗り」に還元し、ラスタライザは塗りだけを実装すれば済むようにするため。

仕様:
- 端点は flat cap、角は mitre join（上限は `P5C_STROKE_MITER_LIMIT`）。
- 閉じた輪郭（および始終点が一致する開輪郭）はリングとして扱い、継ぎ目にも join を置く。
- 全点が同一の輪郭は長さを持たないので描かない。
- 複数輪郭の膨張結果は union してから外周/穴のリングを返す（重なり部が抜けないように）。
  呼び出し側は evenodd で塗ること。
"""

from __future__ import annotations

import logging
from typing import Iterable

import numpy as np
from shapely.geometry import LinearRing, LineString, MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

from engine.core.path import Contour

logger = logging.getLogger(__name__)

# 開輪郭の始終点をこの距離以内なら閉じているとみなす
CLOSE_EPS = 1e-9


def _as_line(points: np.ndarray, closed: bool) -> BaseGeometry | None:
    if np.all(points == points[0]):
        return None
    if not closed and points.shape[0] > 2:
        if float(np.hypot(*(points[-1] - points[0]))) <= CLOSE_EPS:
            closed = True
            points = points[:-1]
    if closed:
        # 終点が始点と重複していればリング化の前に落とす
        if points.shape[0] > 1 and np.array_equal(points[-1], points[0]):
            points = points[:-1]
        if points.shape[0] >= 3:
            return LinearRing(points)
    return LineString(points)


def _rings(geom: BaseGeometry) -> list[np.ndarray]:
    if isinstance(geom, Polygon):
        polys = [geom]
    elif isinstance(geom, MultiPolygon):
        polys = list(geom.geoms)
    else:
        polys = [g for g in getattr(geom, "geoms", ()) if isinstance(g, Polygon)]
    out: list[np.ndarray] = []
    for poly in polys:
        if poly.is_empty:
            continue
        out.append(np.asarray(poly.exterior.coords, dtype=np.float64)[:-1])
        for hole in poly.interiors:
            out.append(np.asarray(hole.coords, dtype=np.float64)[:-1])
    return out


def stroke_outline(
    contours: Iterable[Contour], width: float, *, miter_limit: float = 10.0
) -> list[np.ndarray]:
    """輪郭列を線幅 `width` のストローク外形（リング列）へ変換する。

    引数:
        contours: `Path.flatten()` の結果（`(points, closed)` の列）。
        width: 線幅（px）。0 以下なら空を返す。
        miter_limit: mitre join の上限比。

    返り値:
        evenodd で塗るべきリング（各 (K, 2)、暗黙的に閉じる）のリスト。
    """
    half = float(width) / 2.0
    if not half > 0.0:
        return []
    pieces: list[BaseGeometry] = []
    for points, closed in contours:
        line = _as_line(np.asarray(points, dtype=np.float64), closed)
        if line is None:
            continue
        buffered = line.buffer(
            half, cap_style="flat", join_style="mitre", mitre_limit=float(miter_limit)
        )
        if not buffered.is_empty:
            pieces.append(buffered)
    if not pieces:
        return []
    merged = pieces[0] if len(pieces) == 1 else unary_union(pieces)
    rings = _rings(merged)
    logger.debug("stroke outline: %d contour(s) -> %d ring(s)", len(pieces), len(rings))
    return rings


__all__ = ["stroke_outline", "CLOSE_EPS"]
