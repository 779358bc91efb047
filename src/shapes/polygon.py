from __future__ import annotations

from typing import Sequence

from common.types import Vec2
from engine.core.path import Path, PathBuilder


def polygon_path(points: Sequence[Vec2], *, close: bool = True) -> Path:
    """与えられた頂点を順に直線で結ぶ輪郭を返す。

    引数:
        points: 頂点列（与えられた順に結ぶ。並べ替えはしない）。
        close: True で明示的に閉じる。
    """
    if len(points) < 2:
        raise ValueError(f"polygon needs at least 2 points, got {len(points)}")
    pb = PathBuilder()
    x0, y0 = points[0]
    pb.move_to(x0, y0)
    for x, y in points[1:]:
        pb.line_to(x, y)
    if close:
        pb.close()
    return pb.finish()


def quad_path(
    x1: float, y1: float, x2: float, y2: float, x3: float, y3: float, x4: float, y4: float
) -> Path:
    """4 頂点の閉じた四角形。"""
    return polygon_path([(x1, y1), (x2, y2), (x3, y3), (x4, y4)])


def triangle_path(x1: float, y1: float, x2: float, y2: float, x3: float, y3: float) -> Path:
    """3 頂点の閉じた三角形。"""
    return polygon_path([(x1, y1), (x2, y2), (x3, y3)])


__all__ = ["polygon_path", "quad_path", "triangle_path"]
