"""
どこで: `engine.runtime` サブパッケージ。
何を: 入力スナップショット（InputState/InputSnapshot）とフレーム駆動（SketchDriver/FrameClock）を提供。
なぜ: ウィンドウのイベントとスケッチのフレーム単位コールバックを、固定順序で結ぶため。

`SketchWindow`（pyglet）はヘッドレス環境での import を避けるため再エクスポートしない。
"""

from .frame import FrameClock, SketchDriver, Tickable
from .input import InputSnapshot, InputState, typed_char, typed_chars

__all__ = [
    "FrameClock",
    "SketchDriver",
    "Tickable",
    "InputSnapshot",
    "InputState",
    "typed_char",
    "typed_chars",
]
