"""
どこで: `api.surface`。
何を: 描画面の能力インターフェース `Surface`（最小プリミティブ + 派生操作の既定実装）。
なぜ: `square` は `rect`、`translate/rotate/scale/shear_*` は `apply_matrix` に還元できるため、
      派生操作を 1 か所で定義し、実装側は最小集合だけを提供すれば済むようにするため。
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from engine.core.affine import Affine2x3
from engine.core.state import RectRounding


class Surface(ABC):
    """p5 風の描画語彙。座標は現在の変換を通してデバイス座標へ写される。"""

    # ---- 最小プリミティブ ----
    @abstractmethod
    def background(self, *args) -> None: ...

    @abstractmethod
    def ellipse(self, x: float, y: float, w: float, h: float) -> None: ...

    @abstractmethod
    def line(self, x1: float, y1: float, x2: float, y2: float) -> None: ...

    @abstractmethod
    def point(self, x: float, y: float) -> None: ...

    @abstractmethod
    def rect(
        self, x: float, y: float, w: float, h: float, rounding: RectRounding | None = None
    ) -> None: ...

    @abstractmethod
    def quad(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        x3: float,
        y3: float,
        x4: float,
        y4: float,
    ) -> None: ...

    @abstractmethod
    def triangle(
        self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float
    ) -> None: ...

    @abstractmethod
    def apply_matrix(self, matrix: Affine2x3) -> None:
        """現在の変換の後に `matrix` を合成する。"""

    @abstractmethod
    def reset_matrix(self) -> None: ...

    # ---- 派生操作 ----
    def circle(self, x: float, y: float, d: float) -> None:
        self.ellipse(x, y, d, d)

    def square(self, x: float, y: float, s: float, rounding: RectRounding | None = None) -> None:
        self.rect(x, y, s, s, rounding)

    def translate(self, x: float, y: float) -> None:
        self.apply_matrix(Affine2x3.translation(x, y))

    def rotate(self, angle: float) -> None:
        """原点回りに `angle` [rad] 回転する。"""
        self.apply_matrix(Affine2x3.rotation(angle))

    def scale(self, sx: float, sy: float | None = None) -> None:
        self.apply_matrix(Affine2x3.scaling(sx, sy))

    def shear_x(self, angle: float) -> None:
        self.apply_matrix(Affine2x3.shearing_x(angle))

    def shear_y(self, angle: float) -> None:
        self.apply_matrix(Affine2x3.shearing_y(angle))


__all__ = ["Surface"]
