"""
どこで: `shapes.rect`。
何を: 矩形モードに従う 4 隅の解決と、（角丸を含む）矩形輪郭の生成。
なぜ: `rect`/`square` の幾何をスタイルや変換から切り離し、純関数として検査できるようにするため。

隅の解決（走査順 TL → TR → BR → BL）:
- CORNER : `(x,y) (x+w,y) (x+w,y+h) (x,y+h)`
- CORNERS: `(x,y)` と `(w,h)` をそのまま対角として使う（大小の並べ替え/検証はしない。
           `w<x` や `h<y` は反転した矩形になるだけでエラーにはしない）
- CENTER : 中心から半幅/半高さずつ
- RADIUS : 中心から `w`/`h` ずつ（`w,h` を半径として扱う）

角丸:
- 各隅を半径 r の 90° 円弧（二次ベジェ 2 本）で置き換え、直線辺でつなぐ。
- 要求された半径のどれか 1 つでもちょうど 0 なら、角丸自体を取りやめて
  角丸なしの矩形と同一の輪郭を返す（1 隅だけ尖らせる挙動ではない）。
- 輪郭は常に明示的に close する。
"""

from __future__ import annotations

import math

from engine.core.path import Path, PathBuilder
from engine.core.state import RectMode, RectRounding

from .arc import Arc, append_arc

Corner = tuple[float, float]
Corners = tuple[Corner, Corner, Corner, Corner]


def rect_corners(x: float, y: float, w: float, h: float, mode: RectMode = RectMode.CORNER) -> Corners:
    """矩形モードに従って 4 隅（TL, TR, BR, BL）を返す。"""
    x, y, w, h = float(x), float(y), float(w), float(h)
    if mode is RectMode.CORNER:
        x0, y0, x1, y1 = x, y, x + w, y + h
    elif mode is RectMode.CORNERS:
        x0, y0, x1, y1 = x, y, w, h
    elif mode is RectMode.CENTER:
        hw, hh = w / 2.0, h / 2.0
        x0, y0, x1, y1 = x - hw, y - hh, x + hw, y + hh
    elif mode is RectMode.RADIUS:
        x0, y0, x1, y1 = x - w, y - h, x + w, y + h
    else:  # pragma: no cover - Enum は固定集合
        raise ValueError(f"unsupported rect mode: {mode!r}")
    return ((x0, y0), (x1, y0), (x1, y1), (x0, y1))


def _sharp_path(corners: Corners) -> Path:
    pb = PathBuilder()
    pb.move_to(*corners[0])
    for c in corners[1:]:
        pb.line_to(*c)
    pb.close()
    return pb.finish()


def _unit(dx: float, dy: float) -> tuple[float, float] | None:
    n = math.hypot(dx, dy)
    if n == 0.0:
        return None
    return (dx / n, dy / n)


def _round_corner(pb: PathBuilder, corners: Corners, index: int, radius: float) -> None:
    """隅 `index` を半径 `radius` の円弧に置き換えて `pb` に追加する。"""
    if index < 0 or index > 3:
        raise IndexError(f"corner index must be in 0..3, got {index}")
    px, py = corners[index]
    prev_x, prev_y = corners[index - 1]
    next_x, next_y = corners[(index + 1) % 4]
    u = _unit(prev_x - px, prev_y - py)
    v = _unit(next_x - px, next_y - py)
    if u is None or v is None:
        # 幅か高さが 0 の矩形。弧を置く向きが定まらない
        pb.line_to(px, py)
        return

    sx, sy = px + u[0] * radius, py + u[1] * radius
    ex, ey = px + v[0] * radius, py + v[1] * radius
    cx, cy = px + (u[0] + v[0]) * radius, py + (u[1] + v[1]) * radius

    start = math.atan2(sy - cy, sx - cx)
    end = math.atan2(ey - cy, ex - cx)
    sweep = (end - start + math.pi) % (2.0 * math.pi) - math.pi

    pb.line_to(sx, sy)
    append_arc(pb, Arc(cx, cy, radius, radius, start, sweep))


def rect_path(
    x: float,
    y: float,
    w: float,
    h: float,
    mode: RectMode = RectMode.CORNER,
    rounding: RectRounding | None = None,
) -> Path:
    """矩形（必要なら角丸）の閉輪郭を返す。

    Raises
    ------
    ValueError
        角丸半径に負値が含まれる場合。
    """
    corners = rect_corners(x, y, w, h, mode)
    if rounding is None:
        return _sharp_path(corners)
    radii = rounding.radii()
    if any(r < 0.0 for r in radii):
        raise ValueError(f"corner radii must be >= 0, got {radii}")
    if any(r == 0.0 for r in radii):
        return _sharp_path(corners)

    pb = PathBuilder()
    for index in range(4):
        _round_corner(pb, corners, index, rounding.radius(index))
    pb.close()
    return pb.finish()


__all__ = ["rect_corners", "rect_path"]
