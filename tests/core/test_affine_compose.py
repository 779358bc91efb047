from __future__ import annotations

import math

import numpy as np

from engine.core.affine import IDENTITY, SHEAR_TAN_LIMIT, Affine2x3


def test_translations_accumulate() -> None:
    tf = IDENTITY.then(Affine2x3.translation(10, 0)).then(Affine2x3.translation(20, 0))
    assert tf.approx_equals(Affine2x3.translation(30, 0))


def test_scales_multiply() -> None:
    tf = IDENTITY.then(Affine2x3.scaling(2)).then(Affine2x3.scaling(1.5))
    assert tf.approx_equals(Affine2x3.scaling(3))


def test_then_applies_left_operand_first() -> None:
    t = Affine2x3.translation(10, 0)
    s = Affine2x3.scaling(2)
    assert t.then(s).apply_point(0, 0) == (20.0, 0.0)
    assert s.then(t).apply_point(0, 0) == (10.0, 0.0)


def test_rotation_quarter_turn_is_clockwise_on_screen() -> None:
    x, y = Affine2x3.rotation(math.pi / 2).apply_point(1.0, 0.0)
    assert math.isclose(x, 0.0, abs_tol=1e-12)
    assert math.isclose(y, 1.0)


def test_shear_near_vertical_is_clamped_to_identity() -> None:
    assert Affine2x3.shearing_x(math.pi / 2).is_identity
    assert Affine2x3.shearing_y(-math.pi / 2).is_identity
    assert math.tan(math.pi / 2) > SHEAR_TAN_LIMIT


def test_shear_regular_angle() -> None:
    tf = Affine2x3.shearing_x(math.pi / 4)
    x, y = tf.apply_point(0.0, 2.0)
    assert math.isclose(x, 2.0)
    assert y == 2.0


def test_apply_matches_apply_point() -> None:
    tf = Affine2x3.rotation(0.3).then(Affine2x3.translation(5, -2)).then(Affine2x3.scaling(2, 3))
    pts = np.array([[0.0, 0.0], [1.0, 2.0], [-3.0, 4.5]])
    out = tf.apply(pts)
    for p, q in zip(pts, out):
        assert np.allclose(tf.apply_point(*p), q)
    assert tf.apply(np.zeros((0, 2))).shape == (0, 2)
