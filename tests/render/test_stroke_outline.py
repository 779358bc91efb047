from __future__ import annotations

import numpy as np
import pytest

pytest.importorskip("shapely")

from engine.render.stroke import stroke_outline


def test_open_segment_gets_flat_caps() -> None:
    rings = stroke_outline([(np.array([[0.0, 0.0], [10.0, 0.0]]), False)], 2.0)
    assert len(rings) == 1
    ring = rings[0]
    assert ring[:, 0].min() == pytest.approx(0.0)
    assert ring[:, 0].max() == pytest.approx(10.0)
    assert ring[:, 1].min() == pytest.approx(-1.0)
    assert ring[:, 1].max() == pytest.approx(1.0)


def test_closed_square_yields_outer_and_inner_ring() -> None:
    sq = np.array([[0.0, 0.0], [10.0, 0.0], [10.0, 10.0], [0.0, 10.0]])
    rings = stroke_outline([(sq, True)], 2.0)
    assert len(rings) == 2
    extents = sorted(float(r[:, 0].max() - r[:, 0].min()) for r in rings)
    # mitre join で角が尖ったまま
    assert extents == pytest.approx([8.0, 12.0])


def test_open_contour_with_coincident_ends_is_treated_as_ring() -> None:
    sq = np.array([[0.0, 0.0], [10.0, 0.0], [10.0, 10.0], [0.0, 10.0], [0.0, 0.0]])
    rings = stroke_outline([(sq, False)], 2.0)
    assert len(rings) == 2


def test_degenerate_inputs_produce_nothing() -> None:
    dot = np.array([[3.0, 3.0], [3.0, 3.0]])
    assert stroke_outline([(dot, False)], 2.0) == []
    seg = np.array([[0.0, 0.0], [1.0, 0.0]])
    assert stroke_outline([(seg, False)], 0.0) == []
