"""
どこで: `engine.runtime.window`。
何を: ピクセルバッファを毎フレーム転送する pyglet ウィンドウ `SketchWindow`。
なぜ: OS ウィンドウ/イベントループへの依存をこのモジュールに閉じ込め、
      描画エンジン本体をヘッドレスで扱えるようにするため。

使用例:
    win = SketchWindow(400, 400, title="p5 Window", source=canvas.get_data, input_state=inp)
    pyglet.clock.schedule_interval(clock.tick, clock.interval)
    pyglet.app.run()
"""

from typing import Callable

import numpy as np
import pyglet
from pyglet.window import key, mouse

from .input import InputState


class SketchWindow(pyglet.window.Window):
    def __init__(
        self,
        width: int,
        height: int,
        *,
        title: str,
        source: Callable[[], np.ndarray],
        input_state: InputState,
    ):
        """ウィンドウを生成する。

        引数:
            width: ウィンドウ幅（ピクセル）。
            height: ウィンドウ高さ（ピクセル）。
            title: キャプション。
            source: 行優先 ARGB32 の画素列を返す関数（`get_data`）。
            input_state: キー/マウスイベントの蓄積先。
        """
        super().__init__(width=width, height=height, caption=title, vsync=True)
        self._source = source
        # バッファ寸法（ウィンドウがリサイズされても転送サイズは変えない）
        self._buf_size = (int(width), int(height))
        self._input = input_state

    def on_draw(self):  # Pyglet 既定のイベント名
        """画素列を BGRA として転送する（負の pitch で上下反転）。"""
        self.clear()
        data = np.ascontiguousarray(self._source()).tobytes()
        bw, bh = self._buf_size
        img = pyglet.image.ImageData(bw, bh, "BGRA", data, pitch=-bw * 4)
        img.blit(0, 0)

    def on_key_press(self, symbol, modifiers):
        if symbol == key.ESCAPE:
            self.dispatch_event("on_close")
            return
        self._input.key_down(symbol, modifiers)

    def on_key_release(self, symbol, modifiers):
        self._input.key_up(symbol, modifiers)

    # pyglet は左下原点なので画面座標（左上原点）へ反転する
    def on_mouse_motion(self, x, y, dx, dy):
        self._input.mouse_move(x, self.height - y)

    def on_mouse_drag(self, x, y, dx, dy, buttons, modifiers):
        self._input.mouse_move(x, self.height - y)

    def on_mouse_press(self, x, y, button, modifiers):
        self._input.mouse_move(x, self.height - y)
        self._input.mouse_down(button if button else mouse.LEFT)

    def on_mouse_release(self, x, y, button, modifiers):
        self._input.mouse_up(button if button else mouse.LEFT)

    def on_close(self):
        super().on_close()
        pyglet.app.exit()
