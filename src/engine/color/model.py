"""
どこで: `engine.color.model`。
何を: 8bit RGBA の `Color`、色モデル `ColorModel`、入力スケール `ColorMode` とプリセットを定義。
なぜ: fill/stroke/background に渡す数値の解釈（モデル + チャンネル上限）を 1 つの値に閉じ込め、
      変換処理からは読み取り専用で参照できるようにするため。

データモデル:
- `Color(r, g, b, a)` は 0–255 の整数 4 チャンネル（ストレートアルファで保持）。
  合成時にのみ `premultiplied()` で乗算済みへ変換する。
- `ColorMode(model, max_1, max_2, max_3, max_a)` は各チャンネルの入力上限。
  変更は常に丸ごと差し替え（イミュータブル）。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from common.types import RGBA8


def _check_channel(name: str, v: int) -> int:
    iv = int(v)
    if iv < 0 or iv > 255:
        raise ValueError(f"{name} must be in 0..255, got {v!r}")
    return iv


@dataclass(frozen=True)
class Color:
    """RGBA 各 0–255 の色。生成後は不変。"""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            object.__setattr__(self, name, _check_channel(name, getattr(self, name)))

    def as_tuple(self) -> RGBA8:
        return (self.r, self.g, self.b, self.a)

    def premultiplied(self) -> RGBA8:
        """乗算済み RGBA（0–255, 四捨五入）を返す。"""
        a = self.a
        if a == 255:
            return (self.r, self.g, self.b, 255)
        return (
            (self.r * a + 127) // 255,
            (self.g * a + 127) // 255,
            (self.b * a + 127) // 255,
            a,
        )

    def to_argb32(self) -> int:
        """乗算済み ARGB を 32bit 整数へ詰めて返す（`a<<24 | r<<16 | g<<8 | b`）。"""
        r, g, b, a = self.premultiplied()
        return (a << 24) | (r << 16) | (g << 8) | b

    @property
    def is_opaque(self) -> bool:
        return self.a == 255


class ColorModel(Enum):
    """色モデル。RGB / HSL / HSB の固定集合。"""

    RGB = "rgb"
    HSL = "hsl"
    HSB = "hsb"


@dataclass(frozen=True)
class ColorMode:
    """数値入力の解釈（モデル + 各チャンネルの上限）。

    Attributes
    ----------
    model : ColorModel
        入力チャンネルの意味（RGB / HSL / HSB）。
    max_1, max_2, max_3, max_a : float
        各チャンネルの入力スケール上限。入力はこの値で割って [0, 1] に正規化される。
    """

    model: ColorModel
    max_1: float
    max_2: float
    max_3: float
    max_a: float

    def __post_init__(self) -> None:
        for name in ("max_1", "max_2", "max_3", "max_a"):
            v = float(getattr(self, name))
            if not v > 0.0:
                raise ValueError(f"{name} must be > 0, got {v!r}")
            object.__setattr__(self, name, v)

    @classmethod
    def new(cls, model: ColorModel, max_value: float) -> "ColorMode":
        """全チャンネル同じ上限のモードを作る。"""
        return cls(model, max_value, max_value, max_value, max_value)

    @classmethod
    def with_maxes(
        cls, model: ColorModel, max_1: float, max_2: float, max_3: float, max_a: float
    ) -> "ColorMode":
        return cls(model, max_1, max_2, max_3, max_a)


RGB = ColorMode(ColorModel.RGB, 255.0, 255.0, 255.0, 255.0)
HSB = ColorMode(ColorModel.HSB, 360.0, 100.0, 100.0, 1.0)
HSL = ColorMode(ColorModel.HSL, 360.0, 100.0, 100.0, 1.0)

# HSB/HSL 変換結果（0–1 の RGB）をバイト化するための内部モード
RGB_01 = ColorMode(ColorModel.RGB, 1.0, 1.0, 1.0, 1.0)

BLACK = Color(0, 0, 0, 255)
WHITE = Color(255, 255, 255, 255)
TRANSPARENT = Color(0, 0, 0, 0)


__all__ = [
    "Color",
    "ColorModel",
    "ColorMode",
    "RGB",
    "HSB",
    "HSL",
    "RGB_01",
    "BLACK",
    "WHITE",
    "TRANSPARENT",
]
