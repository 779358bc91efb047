"""
どこで: `engine.runtime.frame`。
何を: 1 フレームの更新単位 `Tickable`、スケッチを 1 フレームずつ進める `SketchDriver`、
      登録順に tick を配る `FrameClock`。
なぜ: コールバックの呼び出し順と「毎フレームの変換リセット」をウィンドウ実装から切り離し、
      ヘッドレスでも同じ順序でフレームを再現できるようにするため。

1 tick の順序:
1) 入力スナップショットを取得（pressed/released を消費）
2) `key_pressed(p5, keys)` → `key_released(p5, keys)` → `key_typed(p5, chars)`（それぞれ空なら呼ばない）
3) `frame_count += 1`、変換を単位行列へリセット
4) `draw(p5)`
"""

from __future__ import annotations

import logging
import time
from typing import Any, Protocol, Sequence

from .input import InputSnapshot, InputState

logger = logging.getLogger(__name__)


class Tickable(Protocol):
    """1 フレーム分の更新を行うインターフェース。"""

    def tick(self, dt: float) -> None:
        """内部状態を `dt` 秒ぶん進める。"""


class SketchLike(Protocol):
    def draw(self, p5: Any) -> None: ...

    def key_pressed(self, p5: Any, keys: Sequence[int]) -> None: ...

    def key_released(self, p5: Any, keys: Sequence[int]) -> None: ...

    def key_typed(self, p5: Any, chars: Sequence[str]) -> None: ...


class SketchDriver:
    """スケッチと描画面を結び、`tick()` ごとに 1 フレームを描く。"""

    def __init__(self, sketch: SketchLike, p5: Any, input_state: InputState | None = None) -> None:
        self.sketch = sketch
        self.p5 = p5
        self.input = input_state if input_state is not None else InputState()
        self.last_input = InputSnapshot()
        self._in_frame = False

    @property
    def in_frame(self) -> bool:
        return self._in_frame

    def tick(self, dt: float) -> None:
        if self._in_frame:
            logger.warning("tick() rejected: frame %d is still drawing", self.p5.state.frame_count)
            raise RuntimeError("re-entrant frame: draw is already in progress on this surface")
        self._in_frame = True
        try:
            snap = self.input.snapshot()
            self.last_input = snap
            self.p5.input = snap
            if snap.pressed:
                self.sketch.key_pressed(self.p5, snap.pressed)
            if snap.released:
                self.sketch.key_released(self.p5, snap.released)
            if snap.typed:
                self.sketch.key_typed(self.p5, snap.typed)
            state = self.p5.state
            state.frame_count += 1
            self.p5.reset_matrix()
            self.sketch.draw(self.p5)
        finally:
            self._in_frame = False


class FrameClock:
    """登録された Tickable を固定順序で実行する。`interval` はスケジューラ用の周期 [s]。"""

    def __init__(self, tickables: Sequence[Tickable], frame_rate: float = 60.0):
        fps = float(frame_rate)
        if not fps > 0.0:
            raise ValueError(f"frame_rate must be > 0, got {frame_rate!r}")
        self._tickables = tuple(tickables)
        self.frame_rate = fps
        self._last_time = time.perf_counter()

    @property
    def interval(self) -> float:
        return 1.0 / self.frame_rate

    # GUI フレームワークから schedule_interval で呼ばせる
    def tick(self, dt: float | None = None) -> None:
        if dt is None:  # pyglet は dt を渡してくれる
            now = time.perf_counter()
            dt = now - self._last_time
            self._last_time = now

        for t in self._tickables:
            t.tick(dt)


__all__ = ["Tickable", "SketchLike", "SketchDriver", "FrameClock"]
