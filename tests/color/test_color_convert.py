from __future__ import annotations

import numpy as np
import pytest

from engine.color import (
    HSB,
    HSL,
    RGB,
    Color,
    ColorMode,
    ColorModel,
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

HSB_FIXTURES = [
    ((0.0, 0.0, 1.0), (1.0, 1.0, 1.0)),
    ((0.0, 1.0, 1.0), (1.0, 0.0, 0.0)),
    ((120.0, 1.0, 0.5), (0.0, 0.5, 0.0)),
    ((240.0, 0.5, 1.0), (0.5, 0.5, 1.0)),
]


@pytest.mark.parametrize("hsb, expected", HSB_FIXTURES)
def test_hsb_fixtures_match_both_implementations(hsb, expected) -> None:
    for fn in (hsb_to_rgb, hsb_to_rgb_sector):
        got = fn(*hsb)
        assert sum((g - e) ** 2 for g, e in zip(got, expected)) < 1e-3


def test_hsb_implementations_agree_on_grid() -> None:
    for h in np.linspace(0.0, 360.0, 73):
        for s in np.linspace(0.0, 1.0, 6):
            for b in np.linspace(0.0, 1.0, 6):
                a = hsb_to_rgb(h, s, b)
                c = hsb_to_rgb_sector(h, s, b)
                for x, y in zip(a, c):
                    assert (x - y) ** 2 < 1e-3


def test_hsb_sector_rejects_out_of_range_hue() -> None:
    with pytest.raises(ValueError):
        hsb_to_rgb_sector(400.0, 1.0, 1.0)


def test_hsl_primary_and_gray() -> None:
    assert hsl_to_rgb(0.0, 1.0, 0.5) == pytest.approx((1.0, 0.0, 0.0))
    assert hsl_to_rgb(120.0, 1.0, 0.5) == pytest.approx((0.0, 1.0, 0.0))
    assert hsl_to_rgb(200.0, 0.0, 0.25) == pytest.approx((0.25, 0.25, 0.25))


def test_python_values_normalize_to_variants() -> None:
    assert as_color_input(128) == Scalar8(128)
    assert as_color_input(0.5) == ScalarUnit(0.5)
    assert as_color_input((1, 2, 3)) == Triple(1.0, 2.0, 3.0)
    assert as_color_input([1, 2, 3, 4]) == Quad(1.0, 2.0, 3.0, 4.0)
    assert as_color_input(b"\x01\x02\x03\x04") == RawBytes(1, 2, 3, 4)
    assert as_color_input("#ff000080") == RawBytes(255, 0, 0, 128)
    assert as_color_input(Color(9, 8, 7, 6)) == RawBytes(9, 8, 7, 6)


@pytest.mark.parametrize("bad", [True, None, (1, 2), object()])
def test_unsupported_inputs_raise_type_error(bad) -> None:
    with pytest.raises(TypeError):
        as_color_input(bad)


def test_scalar8_range_checked_and_ignores_mode() -> None:
    with pytest.raises(ValueError):
        as_color_input(256)
    assert into_color(200, HSB) == Color(200, 200, 200, 255)


def test_scalar_unit_scales_by_third_channel_max() -> None:
    unit = ColorMode.new(ColorModel.RGB, 1.0)
    assert into_color(0.5, unit) == Color(127, 127, 127, 255)
    assert into_color(2.0, unit) == Color(255, 255, 255, 255)


def test_triple_defaults_alpha_to_mode_max() -> None:
    assert into_color((255, 0, 0), RGB) == Color(255, 0, 0, 255)
    assert into_color((120, 100, 50), HSB) == Color(0, 127, 0, 255)


def test_quad_channels_clamp_independently() -> None:
    assert into_color((300, -20, 255, 510), RGB) == Color(255, 0, 255, 255)
    assert into_color((0, 0, 0, -1), RGB) == Color(0, 0, 0, 0)
    assert into_color((float("nan"), 255, 255, 255), RGB) == Color(0, 255, 255, 255)


def test_hsl_mode_carries_alpha_through() -> None:
    c = into_color((0, 100, 50, 0.5), HSL)
    assert (c.r, c.g, c.b) == (255, 0, 0)
    assert c.a == 127


def test_raw_bytes_bypass_mode() -> None:
    assert into_color(RawBytes(1, 2, 3, 4), HSB) == Color(1, 2, 3, 4)


def test_color_premultiplied_packing() -> None:
    assert Color(255, 0, 0, 255).to_argb32() == 0xFFFF0000
    assert Color(255, 255, 255, 128).premultiplied() == (128, 128, 128, 128)
    with pytest.raises(ValueError):
        Color(0, 0, 256)


def test_color_mode_rejects_non_positive_max() -> None:
    with pytest.raises(ValueError):
        ColorMode.with_maxes(ColorModel.RGB, 255, 0, 255, 255)
