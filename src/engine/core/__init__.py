"""
どこで: `engine.core` サブパッケージ。
何を: アフィン変換（Affine2x3）・パス（Path/PathBuilder）・描画状態（DrawState/RectMode/RectRounding）を提供。
なぜ: 形状生成・描画面・ラスタライザが共有する値型を、依存の少ない場所にまとめるため。
"""

from .affine import IDENTITY, Affine2x3
from .path import Path, PathBuilder, Verb
from .state import DrawState, RectMode, RectRounding

__all__ = [
    "IDENTITY",
    "Affine2x3",
    "Path",
    "PathBuilder",
    "Verb",
    "DrawState",
    "RectMode",
    "RectRounding",
]
