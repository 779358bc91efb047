"""
どこで: `engine.render.backend`。
何を: 描画面が依存する 2D ラスタバックエンドの最小インターフェース `RasterBackend`。
なぜ: 描画状態（パス生成/変換/スタイル）とピクセル化の実装を分離し、
      別のラスタライザへ差し替えられる境界を 1 か所に固定するため。
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np

from engine.color.model import Color
from engine.core.affine import Affine2x3
from engine.core.path import Path

if TYPE_CHECKING:  # pragma: no cover
    from engine.text.fonts import FontHandle


class RasterBackend(ABC):
    """パスの塗り/ストロークとピクセル書き込みを提供するバックエンド。"""

    width: int
    height: int

    @abstractmethod
    def clear(self, color: Color) -> None:
        """全画素を `color` で置き換える（合成しない）。"""

    @abstractmethod
    def fill(
        self, path: Path, color: Color, *, antialias: bool = True, fill_rule: str = "nonzero"
    ) -> None:
        """デバイス座標の `path` を塗る。開いた輪郭は暗黙に閉じる。"""

    @abstractmethod
    def stroke(self, path: Path, color: Color, width: float, *, antialias: bool = True) -> None:
        """デバイス座標の `path` を線幅 `width` で描く。"""

    @abstractmethod
    def put_pixel(self, x: int, y: int, color: Color) -> None:
        """1 画素を直接書き込む（範囲外は無視）。"""

    @abstractmethod
    def draw_text(
        self,
        font: "FontHandle",
        size: float,
        text: str,
        position: tuple[float, float],
        color: Color,
        antialias: bool = True,
        transform: Affine2x3 | None = None,
    ) -> None:
        """`position` をベースライン始点として文字列を塗る。"""

    @abstractmethod
    def get_data(self) -> np.ndarray:
        """行優先の ARGB32 画素列（長さ `width*height`、読み取り専用ビュー）。"""


__all__ = ["RasterBackend"]
