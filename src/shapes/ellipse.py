from __future__ import annotations

from engine.core.path import Path, PathBuilder

from .arc import TAU, Arc, append_arc


def ellipse_path(cx: float, cy: float, w: float, h: float) -> Path:
    """中心 `(cx, cy)`・幅 `w`・高さ `h` の楕円輪郭を返す。

    弧の始点（角度 0）へ移動してから 360° の弧を二次ベジェ列で描く。
    始点と終点が一致するため明示的な close は置かない。
    """
    arc = Arc(float(cx), float(cy), float(w) / 2.0, float(h) / 2.0, 0.0, TAU)
    pb = PathBuilder()
    sx, sy = arc.from_point()
    pb.move_to(sx, sy)
    append_arc(pb, arc)
    return pb.finish()


def point_path(x: float, y: float, diameter: float) -> Path:
    """点を直径 `diameter` の円として表す輪郭。"""
    return ellipse_path(x, y, diameter, diameter)


__all__ = ["ellipse_path", "point_path"]
