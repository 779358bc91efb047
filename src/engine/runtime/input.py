"""
どこで: `engine.runtime.input`。
何を: ウィンドウから届くキー/マウスイベントをフレーム間で蓄積する `InputState` と、
      描画 1 フレーム分の不変スナップショット `InputSnapshot`、および入力文字の導出。
なぜ: イベント駆動のウィンドウ層と、フレーム単位で呼ばれるスケッチコールバックの境界を固定するため。

キーコード:
- pyglet の keysym と同じ整数値を使う（`pyglet.window.key.A == 97` など）。
  本モジュールは pyglet を import しないため、ヘッドレス環境でも利用できる。

入力文字:
- 英字キー → 小文字。Shift と CapsLock のどちらか一方だけが有効なら大文字。
- 数字キー（最上段/テンキー）→ Shift が押されていない場合のみその数字。
- それ以外（記号/ロケール依存）は無視。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

# pyglet.window.key と同値
KEY_A = 97
KEY_Z = 122
KEY_0 = 48
KEY_9 = 57
KEY_NUM_0 = 65456
KEY_NUM_9 = 65465
MOD_SHIFT = 1
MOD_CAPSLOCK = 8


def typed_char(symbol: int, *, shift: bool, caps_lock: bool) -> str | None:
    """1 キーから入力文字を導出する。対象外なら None。"""
    if KEY_A <= symbol <= KEY_Z:
        ch = chr(symbol)
        return ch.upper() if shift != caps_lock else ch
    if shift:
        return None
    if KEY_0 <= symbol <= KEY_9:
        return chr(symbol)
    if KEY_NUM_0 <= symbol <= KEY_NUM_9:
        return str(symbol - KEY_NUM_0)
    return None


def typed_chars(symbols: Iterable[int], *, shift: bool, caps_lock: bool) -> tuple[str, ...]:
    out: list[str] = []
    for s in symbols:
        ch = typed_char(s, shift=shift, caps_lock=caps_lock)
        if ch is not None:
            out.append(ch)
    return tuple(out)


@dataclass(frozen=True)
class InputSnapshot:
    """1 フレーム分の入力（スケッチコールバックへ渡す）。"""

    keys_down: frozenset[int] = frozenset()
    pressed: tuple[int, ...] = ()
    released: tuple[int, ...] = ()
    typed: tuple[str, ...] = ()
    shift: bool = False
    caps_lock: bool = False
    mouse_x: float = 0.0
    mouse_y: float = 0.0
    mouse_pressed: bool = False

    def is_down(self, symbol: int) -> bool:
        return symbol in self.keys_down


@dataclass
class InputState:
    """イベントを蓄積し、`snapshot()` でエッジ（pressed/released）を消費する。"""

    keys_down: set[int] = field(default_factory=set)
    pressed: list[int] = field(default_factory=list)
    released: list[int] = field(default_factory=list)
    modifiers: int = 0
    mouse_x: float = 0.0
    mouse_y: float = 0.0
    mouse_buttons: int = 0

    def key_down(self, symbol: int, modifiers: int = 0) -> None:
        self.modifiers = int(modifiers)
        # 押しっぱなしの自動リピートは pressed に積まない
        if symbol in self.keys_down:
            return
        self.keys_down.add(symbol)
        self.pressed.append(symbol)

    def key_up(self, symbol: int, modifiers: int = 0) -> None:
        self.modifiers = int(modifiers)
        self.keys_down.discard(symbol)
        self.released.append(symbol)

    def mouse_move(self, x: float, y: float) -> None:
        self.mouse_x, self.mouse_y = float(x), float(y)

    def mouse_down(self, button: int) -> None:
        self.mouse_buttons |= int(button)

    def mouse_up(self, button: int) -> None:
        self.mouse_buttons &= ~int(button)

    def snapshot(self) -> InputSnapshot:
        shift = bool(self.modifiers & MOD_SHIFT)
        caps = bool(self.modifiers & MOD_CAPSLOCK)
        snap = InputSnapshot(
            keys_down=frozenset(self.keys_down),
            pressed=tuple(self.pressed),
            released=tuple(self.released),
            typed=typed_chars(self.pressed, shift=shift, caps_lock=caps),
            shift=shift,
            caps_lock=caps,
            mouse_x=self.mouse_x,
            mouse_y=self.mouse_y,
            mouse_pressed=self.mouse_buttons != 0,
        )
        self.pressed.clear()
        self.released.clear()
        return snap


__all__ = ["InputState", "InputSnapshot", "typed_char", "typed_chars", "MOD_SHIFT", "MOD_CAPSLOCK"]
