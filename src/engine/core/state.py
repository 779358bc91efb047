"""
どこで: `engine.core.state`。
何を: 描画面ごとの可変状態 `DrawState`（fill/stroke/線幅/矩形モード/変換/色モード/フレーム情報）と、
      矩形モード `RectMode`・角丸 `RectRounding` を定義。
なぜ: 描画操作が参照/更新する状態を 1 つの明示的な構造体にまとめ、
      グローバル状態を持たずにセッション単位で排他的に扱えるようにするため。

不変条件:
- `stroke_weight >= 0`。ちょうど 0 は「ストロークなし」の正規表現（`no_stroke()` と等価）。
- `fill_color is None` は「塗りなし」。
- `transform` はフレームループが毎フレーム描画前に単位行列へ戻す（図形の途中では戻さない）。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from engine.color.model import BLACK, RGB, WHITE, Color, ColorMode

from .affine import IDENTITY, Affine2x3


class RectMode(Enum):
    """矩形の 4 引数の解釈。"""

    CORNER = "corner"
    CORNERS = "corners"
    CENTER = "center"
    RADIUS = "radius"


@dataclass(frozen=True)
class RectRounding:
    """角ごとの半径（左上→右上→右下→左下）。全て 0 は角丸なしと等価。"""

    tl: float = 0.0
    tr: float = 0.0
    br: float = 0.0
    bl: float = 0.0

    @classmethod
    def equal(cls, radius: float) -> "RectRounding":
        r = float(radius)
        return cls(r, r, r, r)

    def radii(self) -> tuple[float, float, float, float]:
        return (float(self.tl), float(self.tr), float(self.br), float(self.bl))

    def radius(self, corner: int) -> float:
        """角インデックス 0..3 の半径。範囲外はエンジン内部の不整合として IndexError。"""
        if corner < 0 or corner > 3:
            raise IndexError(f"corner index must be in 0..3, got {corner}")
        return self.radii()[corner]


def _validate_stroke_weight(weight: float) -> float:
    w = float(weight)
    if not math.isfinite(w) or w < 0.0:
        raise ValueError(f"stroke_weight must be a finite value >= 0, got {weight!r}")
    return w


@dataclass
class DrawState:
    """1 つの描画面が保持する現在のスタイル/モード/変換とフレーム情報。"""

    fill_color: Color | None = WHITE
    stroke_color: Color = BLACK
    stroke_weight: float = 1.0
    rect_mode: RectMode = RectMode.CORNER
    transform: Affine2x3 = IDENTITY
    color_mode: ColorMode = RGB
    frame_count: int = 0
    frame_rate: float = 60.0
    text_family: str = "sans-serif"
    text_size: float = 12.0

    def __post_init__(self) -> None:
        self.stroke_weight = _validate_stroke_weight(self.stroke_weight)

    def set_stroke_weight(self, weight: float) -> None:
        self.stroke_weight = _validate_stroke_weight(weight)

    def set_frame_rate(self, fps: float) -> None:
        v = float(fps)
        if not math.isfinite(v) or v <= 0.0:
            raise ValueError(f"frame_rate must be > 0, got {fps!r}")
        self.frame_rate = v

    def push_transform(self, tf: Affine2x3) -> None:
        """現在の変換の後に `tf` を合成する（`transform = transform.then(tf)`）。"""
        self.transform = self.transform.then(tf)

    def reset_transform(self) -> None:
        self.transform = IDENTITY

    @property
    def has_stroke(self) -> bool:
        return self.stroke_weight != 0.0

    @property
    def has_fill(self) -> bool:
        return self.fill_color is not None


__all__ = ["DrawState", "RectMode", "RectRounding"]
