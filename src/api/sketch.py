"""
どこで: `api.sketch`（スケッチ基底クラスと実行ランナー）。
何を: ユーザが継承する `Sketch`（setup/draw/キーコールバック）と、
      描画面の構築・ウィンドウ生成・フレーム駆動を行う `run_sketch`。
なぜ: 少ない記述でスケッチを起動でき、ウィンドウなし（`init_only`）でも同じ初期化経路を検証できるようにするため。

実行フロー:
1) 設定解決: `Sketch` の `width/height/title`（None なら `configs` の `sketch.*`、なければ既定）と
   フレームレート（引数 > `setup()` 内の `p5.frame_rate()` > `sketch.frame_rate` > 60）。
2) `Canvas` を構築し `setup(p5)` を 1 回呼ぶ。
3) `init_only` ならここで描画面を返す（pyglet を import しない）。
4) `SketchWindow` と `SketchDriver` を結線し、`FrameClock` を `1/frame_rate` 周期で駆動する。
   `draw()` 中に `frame_rate()` が変わった場合は次フレームから周期を張り替える。
5) `ESC` またはウィンドウを閉じると終了し、描画面を返す。

例（最小スケッチ）:
    from api import Sketch, run_sketch

    class Hello(Sketch):
        def draw(self, p5):
            p5.background(220)
            p5.ellipse(200, 200, 100, 50)

    run_sketch(Hello())
"""

from __future__ import annotations

import logging
from typing import Sequence

from common.logging import setup_default_logging
from engine.runtime.frame import FrameClock, SketchDriver
from engine.runtime.input import InputState
from util.utils import config_section

from .canvas import Canvas

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "p5 Window"
DEFAULT_WIDTH = 400
DEFAULT_HEIGHT = 400
DEFAULT_FRAME_RATE = 60.0


class Sketch:
    """スケッチの基底クラス。必要なメソッドだけを上書きする。

    クラス属性 `title/width/height` を None のままにすると設定ファイルの値を使う。
    """

    title: str | None = None
    width: int | None = None
    height: int | None = None

    def setup(self, p5: Canvas) -> None:
        """最初のフレームの前に 1 回だけ呼ばれる。"""

    def draw(self, p5: Canvas) -> None:
        """毎フレーム呼ばれる（直前に変換は単位行列へリセット済み）。"""

    def key_pressed(self, p5: Canvas, keys: Sequence[int]) -> None:
        """このフレームで押されたキー（pyglet の keysym）。"""

    def key_released(self, p5: Canvas, keys: Sequence[int]) -> None:
        """このフレームで離されたキー。"""

    def key_typed(self, p5: Canvas, chars: Sequence[str]) -> None:
        """このフレームで入力された英数字。"""


def resolve_window_settings(sketch: Sketch) -> tuple[int, int, str, float]:
    """`(width, height, title, frame_rate)` を解決する。

    - スケッチ属性 > `sketch.*` 設定 > 既定値。
    - 幅/高さが正でない場合は `ValueError`。
    """
    cfg = config_section("sketch")
    width = sketch.width if sketch.width is not None else cfg.get("width", DEFAULT_WIDTH)
    height = sketch.height if sketch.height is not None else cfg.get("height", DEFAULT_HEIGHT)
    title = sketch.title if sketch.title is not None else cfg.get("title", DEFAULT_TITLE)
    try:
        fps = float(cfg.get("frame_rate", DEFAULT_FRAME_RATE))
    except (TypeError, ValueError):
        fps = DEFAULT_FRAME_RATE
    if not fps > 0.0:
        fps = DEFAULT_FRAME_RATE
    w, h = int(width), int(height)
    if w <= 0 or h <= 0:
        raise ValueError(f"sketch size must be positive, got {width}x{height}")
    return w, h, str(title), fps


def run_sketch(
    sketch: Sketch,
    *,
    frame_rate: float | None = None,
    init_only: bool = False,
) -> Canvas:
    """スケッチを実行し、使用した描画面を返す。

    Parameters
    ----------
    sketch : Sketch
        描画コールバックを持つスケッチ。
    frame_rate : float | None
        目標フレームレート。None なら `setup()` 内の設定/設定ファイル/60 の順で解決。
    init_only : bool, default False
        True で `setup()` までを実行して返す（ウィンドウを作らない）。
    """
    setup_default_logging()
    width, height, title, default_fps = resolve_window_settings(sketch)

    p5 = Canvas(width, height)
    p5.state.set_frame_rate(default_fps)
    sketch.setup(p5)
    if frame_rate is not None:
        p5.state.set_frame_rate(frame_rate)
    logger.info("sketch %r: %dx%d @ %.1f fps", title, width, height, p5.state.frame_rate)

    if init_only:
        return p5

    # 遅延インポート（ヘッドレス環境でのウィンドウ生成を避ける）
    import pyglet

    from engine.runtime.window import SketchWindow

    input_state = InputState()
    window = SketchWindow(width, height, title=title, source=p5.get_data, input_state=input_state)
    driver = SketchDriver(sketch, p5, input_state)
    clock = FrameClock([driver], frame_rate=p5.state.frame_rate)

    def _tick(dt: float) -> None:
        clock.tick(dt)
        # draw() 中の frame_rate() 変更を反映する
        if p5.state.frame_rate != clock.frame_rate:
            pyglet.clock.unschedule(_tick)
            clock.frame_rate = p5.state.frame_rate
            pyglet.clock.schedule_interval(_tick, clock.interval)

    pyglet.clock.schedule_interval(_tick, clock.interval)
    try:
        pyglet.app.run()
    finally:
        pyglet.clock.unschedule(_tick)
        if not window.has_exit:
            window.close()
    return p5


__all__ = ["Sketch", "run_sketch", "resolve_window_settings"]
