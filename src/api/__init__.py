"""
どこで: `api` 入口（高レベル公開 API）。
何を: 描画面 `Canvas`（別名 `P5`）・スケッチ基底 `Sketch`・ランナー `run_sketch` と、
      スケッチ内で使う色/モード/角丸の値型を再輸出。
なぜ: 利用者が単一名前空間からスケッチの定義 → 実行まで完結できるようにするため。

Usage:
    from api import HSB, RectMode, RectRounding, Sketch, run_sketch

    class Demo(Sketch):
        def setup(self, p5):
            p5.color_mode(HSB)
            p5.rect_mode(RectMode.CENTER)

        def draw(self, p5):
            p5.background(0, 0, 90)
            p5.fill(p5.frame_count % 360, 80, 100)
            p5.rect(200, 200, 120, 80, RectRounding.equal(12))

    run_sketch(Demo())
"""

from engine.color import BLACK, HSB, HSL, RGB, TRANSPARENT, WHITE, Color, ColorMode, ColorModel
from engine.core.affine import Affine2x3
from engine.core.state import RectMode, RectRounding
from engine.text.fonts import FontProperties

from .canvas import P5, Canvas
from .sketch import Sketch
from .sketch import run_sketch as run
from .sketch import run_sketch as run_sketch
from .surface import Surface

__all__ = [
    # メインAPI
    "Canvas",
    "P5",
    "Surface",
    "Sketch",
    "run_sketch",  # 実行（詳細指定）
    "run",  # 実行（エイリアス、簡易）
    # 値型
    "Affine2x3",
    "Color",
    "ColorMode",
    "ColorModel",
    "RGB",
    "HSB",
    "HSL",
    "BLACK",
    "WHITE",
    "TRANSPARENT",
    "RectMode",
    "RectRounding",
    "FontProperties",
]

# バージョン情報
__version__ = "0.1.0"
