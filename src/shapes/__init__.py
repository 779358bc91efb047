"""
どこで: `shapes` パッケージ（パス生成）。
何を: 楕円/弧・矩形（角丸）・多角形（quad/triangle）・線分のローカル座標パスを生成する純関数群。
なぜ: 幾何生成を変換/スタイル/ラスタライズから分離し、描画面から共通に呼べるようにするため。
"""

from .arc import Arc, append_arc
from .ellipse import ellipse_path, point_path
from .line import line_path
from .polygon import polygon_path, quad_path, triangle_path
from .rect import rect_corners, rect_path

__all__ = [
    "Arc",
    "append_arc",
    "ellipse_path",
    "point_path",
    "line_path",
    "polygon_path",
    "quad_path",
    "triangle_path",
    "rect_corners",
    "rect_path",
]
