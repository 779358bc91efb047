from __future__ import annotations

import pytest

from engine.color.model import BLACK, RGB, WHITE
from engine.core.affine import Affine2x3
from engine.core.state import DrawState, RectMode, RectRounding


def test_default_state() -> None:
    st = DrawState()
    assert st.fill_color == WHITE
    assert st.stroke_color == BLACK
    assert st.stroke_weight == 1.0
    assert st.rect_mode is RectMode.CORNER
    assert st.transform.is_identity
    assert st.color_mode == RGB
    assert st.frame_count == 0
    assert st.frame_rate == 60.0
    assert st.text_family == "sans-serif"
    assert st.text_size == 12.0


@pytest.mark.parametrize("bad", [-1.0, float("nan"), float("inf")])
def test_stroke_weight_rejects_invalid(bad) -> None:
    st = DrawState()
    with pytest.raises(ValueError):
        st.set_stroke_weight(bad)
    with pytest.raises(ValueError):
        DrawState(stroke_weight=bad)


def test_zero_weight_means_no_stroke() -> None:
    st = DrawState()
    st.set_stroke_weight(0)
    assert not st.has_stroke


def test_frame_rate_must_be_positive() -> None:
    st = DrawState()
    with pytest.raises(ValueError):
        st.set_frame_rate(0)
    st.set_frame_rate(24)
    assert st.frame_rate == 24.0


def test_push_and_reset_transform() -> None:
    st = DrawState()
    st.push_transform(Affine2x3.translation(1, 2))
    st.push_transform(Affine2x3.scaling(2))
    assert st.transform.apply_point(0, 0) == (2.0, 4.0)
    st.reset_transform()
    assert st.transform.is_identity


def test_rounding_helpers() -> None:
    r = RectRounding.equal(4)
    assert r.radii() == (4.0, 4.0, 4.0, 4.0)
    assert RectRounding(1, 2, 3, 4).radius(2) == 3.0
    with pytest.raises(IndexError):
        r.radius(4)
