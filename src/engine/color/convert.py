"""
どこで: `engine.color.convert`。
何を: 多態的な色入力（スカラー/3要素/4要素/生バイト/Hex）を、現在の `ColorMode` に従って
      正規の `Color` へ変換する。HSB/HSL→RGB の変換関数もここに置く。
なぜ: 呼び出し側（fill/stroke/background）の「オーバーロード風」の引数を、
      小さなタグ付きユニオン + 変種ごとの変換関数に整理するため。

入力の変種:
- `Scalar8(v)`      : 8bit グレー。モードの上限は無視（既にフルレンジ）。
- `ScalarUnit(v)`   : 浮動小数グレー。`max_3` で正規化 → クランプ → 0–255。
- `Triple(c1,c2,c3)`: アルファを `mode.max_a`（そのモードで完全不透明）とした `Quad` と等価。
- `Quad(c1..c4)`    : 各チャンネルを対応する上限で割って [0,1] にクランプ。
                      RGB はそのまま ×255、HSB/HSL は色相を 0–360 に戻して RGB(0–1) に変換し、
                      単位上限の RGB モードでバイト化する（アルファはそのまま持ち越し）。
- `RawBytes(r,g,b,a)`: RGBA をそのまま使う。モードは一切見ない。

エントリポイントは `into_color(value, mode)` の 1 つ。Python 値は `as_color_input()` で
上記の変種に正規化される（int→Scalar8, float→ScalarUnit, 長さ3/4の列→Triple/Quad,
`Color`/bytes/Hex 文字列→RawBytes）。
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral, Real
from typing import Sequence, Union

import numpy as np

from .model import RGB, RGB_01, Color, ColorMode, ColorModel


def _clamp01(x: float) -> float:
    if x != x:  # NaN
        return 0.0
    return 0.0 if x < 0.0 else 1.0 if x > 1.0 else float(x)


def _unit_to_byte(x: float) -> int:
    """[0,1] → 0–255（切り捨て）。"""
    return int(_clamp01(x) * 255.0)


# ── HSB / HSL → RGB ─────────────────────────────────────────
def hsb_to_rgb(h: float, s: float, b: float) -> tuple[float, float, float]:
    """HSB(HSV) → RGB。`h∈[0,360]`, `s,b∈[0,1]` を仮定し、各 0–1 の RGB を返す。

    `k = (n + h/60) mod 6`, `c = b - b*s*clamp(min(k, 4-k), 0, 1)` を n=5,3,1 で評価する。
    """

    def f(n: float) -> float:
        k = (n + h / 60.0) % 6.0
        return b - b * s * max(0.0, min(k, 4.0 - k, 1.0))

    return (f(5.0), f(3.0), f(1.0))


def hsb_to_rgb_sector(h: float, s: float, b: float) -> tuple[float, float, float]:
    """HSB → RGB の区分（セクタ）実装。`hsb_to_rgb` と数値的に等価であることの検証用。

    Raises
    ------
    ValueError
        `h` が [0, 360] の外にある場合。
    """
    c = b * s
    h_prime = h / 60.0
    x = c * (1.0 - abs(h_prime % 2.0 - 1.0))

    if 0.0 <= h_prime <= 1.0:
        r1, g1, b1 = c, x, 0.0
    elif 1.0 < h_prime <= 2.0:
        r1, g1, b1 = x, c, 0.0
    elif 2.0 < h_prime <= 3.0:
        r1, g1, b1 = 0.0, c, x
    elif 3.0 < h_prime <= 4.0:
        r1, g1, b1 = 0.0, x, c
    elif 4.0 < h_prime <= 5.0:
        r1, g1, b1 = x, 0.0, c
    elif 5.0 < h_prime <= 6.0:
        r1, g1, b1 = c, 0.0, x
    else:
        raise ValueError(f"invalid hue value: {h!r}")

    m = b - c
    return (r1 + m, g1 + m, b1 + m)


def hsl_to_rgb(h: float, s: float, lightness: float) -> tuple[float, float, float]:
    """HSL → RGB。`h∈[0,360]`, `s,l∈[0,1]` を仮定し、各 0–1 の RGB を返す。"""
    a = s * min(lightness, 1.0 - lightness)

    def f(n: float) -> float:
        k = (n + h / 30.0) % 12.0
        return lightness - a * max(-1.0, min(k - 3.0, 9.0 - k, 1.0))

    return (f(0.0), f(8.0), f(4.0))


# ── 入力の変種（タグ付きユニオン） ───────────────────────────
@dataclass(frozen=True)
class Scalar8:
    value: int

    def to_color(self, mode: ColorMode) -> Color:
        v = int(self.value)
        return Color(v, v, v, 255)


@dataclass(frozen=True)
class ScalarUnit:
    value: float

    def to_color(self, mode: ColorMode) -> Color:
        v = _unit_to_byte(float(self.value) / mode.max_3)
        return Color(v, v, v, 255)


@dataclass(frozen=True)
class Quad:
    c1: float
    c2: float
    c3: float
    c4: float

    def to_color(self, mode: ColorMode) -> Color:
        scaled = (
            _clamp01(float(self.c1) / mode.max_1),
            _clamp01(float(self.c2) / mode.max_2),
            _clamp01(float(self.c3) / mode.max_3),
            _clamp01(float(self.c4) / mode.max_a),
        )
        if mode.model is ColorModel.RGB:
            r, g, b, a = (_unit_to_byte(c) for c in scaled)
            return RawBytes(r, g, b, a).to_color(RGB)
        if mode.model is ColorModel.HSB:
            rgb = hsb_to_rgb(scaled[0] * 360.0, scaled[1], scaled[2])
        elif mode.model is ColorModel.HSL:
            rgb = hsl_to_rgb(scaled[0] * 360.0, scaled[1], scaled[2])
        else:  # pragma: no cover - Enum は固定集合
            raise ValueError(f"unsupported color model: {mode.model!r}")
        return Quad(rgb[0], rgb[1], rgb[2], scaled[3]).to_color(RGB_01)


@dataclass(frozen=True)
class Triple:
    c1: float
    c2: float
    c3: float

    def to_color(self, mode: ColorMode) -> Color:
        return Quad(self.c1, self.c2, self.c3, mode.max_a).to_color(mode)


@dataclass(frozen=True)
class RawBytes:
    r: int
    g: int
    b: int
    a: int = 255

    def to_color(self, mode: ColorMode) -> Color:
        return Color(self.r, self.g, self.b, self.a)


ColorInput = Union[Scalar8, ScalarUnit, Triple, Quad, RawBytes]
_VARIANTS = (Scalar8, ScalarUnit, Triple, Quad, RawBytes)

ColorLike = Union[ColorInput, Color, int, float, str, bytes, Sequence[float]]


def parse_hex_color_str(s: str) -> RawBytes:
    """Hex 文字列から RGBA バイトを返す。

    受理形式: "#RRGGBB", "#RRGGBBAA", "0xRRGGBB", "0xRRGGBBAA", "RRGGBB", "RRGGBBAA"。
    大文字/小文字は不問。
    """
    t = s.strip()
    if t.startswith("#"):
        t = t[1:]
    elif t.lower().startswith("0x"):
        t = t[2:]
    if len(t) not in (6, 8):
        raise ValueError(f"invalid hex color length: '{s}' (expected RRGGBB or RRGGBBAA)")
    try:
        r = int(t[0:2], 16)
        g = int(t[2:4], 16)
        b = int(t[4:6], 16)
        a = int(t[6:8], 16) if len(t) == 8 else 255
    except ValueError as e:
        raise ValueError(f"invalid hex color: '{s}'") from e
    return RawBytes(r, g, b, a)


def as_color_input(value: object) -> ColorInput:
    """Python 値を色入力の変種へ正規化する。

    Raises
    ------
    TypeError
        受理できない型（bool/None/長さ 3,4 以外の列など）。
    ValueError
        8bit スカラー/生バイトが 0–255 の外にある場合、Hex が不正な場合。
    """
    if isinstance(value, _VARIANTS):
        return value
    if isinstance(value, Color):
        return RawBytes(value.r, value.g, value.b, value.a)
    if isinstance(value, bool) or value is None:
        raise TypeError(f"unsupported color value: {value!r}")
    if isinstance(value, Integral):
        iv = int(value)
        if iv < 0 or iv > 255:
            raise ValueError(f"8-bit gray must be in 0..255, got {iv}")
        return Scalar8(iv)
    if isinstance(value, Real):
        return ScalarUnit(float(value))
    if isinstance(value, str):
        return parse_hex_color_str(value)
    if isinstance(value, (bytes, bytearray)):
        if len(value) != 4:
            raise TypeError(f"raw color bytes must have length 4, got {len(value)}")
        return RawBytes(value[0], value[1], value[2], value[3])
    if isinstance(value, (tuple, list, np.ndarray)):
        seq = [float(v) for v in np.asarray(value, dtype=np.float64).reshape(-1)]
        if len(seq) == 3:
            return Triple(seq[0], seq[1], seq[2])
        if len(seq) == 4:
            return Quad(seq[0], seq[1], seq[2], seq[3])
        raise TypeError(f"color sequence must have 3 or 4 components, got {len(seq)}")
    raise TypeError(f"unsupported color type: {type(value)!r}")


def into_color(value: ColorLike, mode: ColorMode = RGB) -> Color:
    """任意の色入力を `mode` に従って `Color` に変換する。"""
    return as_color_input(value).to_color(mode)


__all__ = [
    "Scalar8",
    "ScalarUnit",
    "Triple",
    "Quad",
    "RawBytes",
    "ColorInput",
    "ColorLike",
    "as_color_input",
    "into_color",
    "parse_hex_color_str",
    "hsb_to_rgb",
    "hsb_to_rgb_sector",
    "hsl_to_rgb",
]
