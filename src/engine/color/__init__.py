"""
どこで: `engine.color` サブパッケージ。
何を: 色の値型（Color）・色モード（ColorModel/ColorMode とプリセット）・入力変換（into_color）を提供。
なぜ: 描画状態や API 層から、モード依存の色解釈を 1 か所に集約して再利用するため。
"""

from .convert import (
    ColorInput,
    ColorLike,
    Quad,
    RawBytes,
    Scalar8,
    ScalarUnit,
    Triple,
    as_color_input,
    hsb_to_rgb,
    hsb_to_rgb_sector,
    hsl_to_rgb,
    into_color,
)
from .model import BLACK, HSB, HSL, RGB, TRANSPARENT, WHITE, Color, ColorMode, ColorModel

__all__ = [
    "Color",
    "ColorModel",
    "ColorMode",
    "RGB",
    "HSB",
    "HSL",
    "BLACK",
    "WHITE",
    "TRANSPARENT",
    "ColorInput",
    "ColorLike",
    "Scalar8",
    "ScalarUnit",
    "Triple",
    "Quad",
    "RawBytes",
    "as_color_input",
    "into_color",
    "hsb_to_rgb",
    "hsb_to_rgb_sector",
    "hsl_to_rgb",
]
