from __future__ import annotations

import logging

import pytest

from engine.core.affine import Affine2x3
from engine.core.state import DrawState
from engine.runtime.frame import FrameClock, SketchDriver
from engine.runtime.input import InputState


class _FakeSurface:
    def __init__(self) -> None:
        self.state = DrawState()
        self.input = None

    def reset_matrix(self) -> None:
        self.state.reset_transform()


class _Recorder:
    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.seen_identity: list[bool] = []

    def draw(self, p5) -> None:
        self.calls.append(("draw", p5.state.frame_count))
        self.seen_identity.append(p5.state.transform.is_identity)
        p5.state.push_transform(Affine2x3.translation(5, 5))

    def key_pressed(self, p5, keys) -> None:
        self.calls.append(("pressed", tuple(keys)))

    def key_released(self, p5, keys) -> None:
        self.calls.append(("released", tuple(keys)))

    def key_typed(self, p5, chars) -> None:
        self.calls.append(("typed", tuple(chars)))


@pytest.mark.smoke
def test_tick_order_and_frame_count() -> None:
    sk, p5, inp = _Recorder(), _FakeSurface(), InputState()
    driver = SketchDriver(sk, p5, inp)
    inp.key_down(ord("b"))
    inp.key_up(ord("b"))
    driver.tick(1 / 60)
    assert sk.calls == [
        ("pressed", (ord("b"),)),
        ("released", (ord("b"),)),
        ("typed", ("b",)),
        ("draw", 1),
    ]
    assert p5.input is driver.last_input


def test_empty_input_skips_key_callbacks() -> None:
    sk, p5 = _Recorder(), _FakeSurface()
    driver = SketchDriver(sk, p5)
    driver.tick(0.0)
    driver.tick(0.0)
    assert sk.calls == [("draw", 1), ("draw", 2)]


def test_transform_is_reset_every_frame() -> None:
    sk, p5 = _Recorder(), _FakeSurface()
    driver = SketchDriver(sk, p5)
    for _ in range(3):
        driver.tick(0.0)
    assert sk.seen_identity == [True, True, True]


def test_reentrant_tick_raises(caplog: pytest.LogCaptureFixture) -> None:
    p5 = _FakeSurface()

    class Nested(_Recorder):
        def draw(self, surface) -> None:
            driver.tick(0.0)

    driver = SketchDriver(Nested(), p5)
    with caplog.at_level(logging.WARNING, logger="engine.runtime.frame"):
        with pytest.raises(RuntimeError):
            driver.tick(0.0)
    assert not driver.in_frame
    assert "frame 1 is still drawing" in caplog.text


def test_frame_clock_dispatches_in_order() -> None:
    order: list[str] = []

    class T:
        def __init__(self, name: str) -> None:
            self.name = name

        def tick(self, dt: float) -> None:
            order.append(self.name)

    clock = FrameClock([T("a"), T("b")], frame_rate=30)
    assert clock.interval == pytest.approx(1 / 30)
    clock.tick(0.1)
    clock.tick()
    assert order == ["a", "b", "a", "b"]
    with pytest.raises(ValueError):
        FrameClock([], frame_rate=0)
