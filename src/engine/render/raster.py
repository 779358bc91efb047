"""
どこで: `engine.render.raster`。
何を: 折れ線輪郭を符号付き面積カバレッジでマスク化し、乗算済み ARGB バッファへ source-over 合成する。
なぜ: ベクタパス → ピクセルの変換を CPU（numpy + numba）だけで完結させ、
      描画状態側からはパスと色だけを渡せば済むようにするため。

アルゴリズム:
- 各線分を走査線ごとに辿り、横切る画素へ「その画素より右側で増える被覆量」を符号付きで加算する
  （font-rs 系の面積カバレッジ）。行方向に累積和を取ると画素ごとの巻き数（小数）が得られる。
- 巻き数を塗り規則で [0, 1] の被覆率に解決する。
  - nonzero : `clip(|w|, 0, 1)`
  - evenodd : `|remainder(w + 1, 2) - 1|`
- アンチエイリアス無効時は被覆率 0.5 を閾値に 0/1 化する。
- 輪郭は常に暗黙的に閉じたものとして扱う（終点 → 始点の辺を補う）。
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence

import numpy as np
from numba import njit  # type: ignore[attr-defined]

from common.types import RGBA8

FILL_NONZERO = "nonzero"
FILL_EVENODD = "evenodd"

# これ未満の被覆率は 0 とみなす
MIN_COVERAGE = 1e-6


@njit(cache=True)
def accumulate_coverage(trace: np.ndarray, segments: np.ndarray) -> None:
    """線分列 `(N, 4) = x0, y0, x1, y1` の符号付き被覆量を `trace[y, x]` へ加算する。

    座標は `trace` のローカル画素座標。左端より左の寄与は列 0 に寄せ、
    右端より右と上下の範囲外は捨てる（行方向の累積和で正しい巻き数になる）。
    """
    h, w = trace.shape
    for i in range(segments.shape[0]):
        ax = segments[i, 0]
        ay = segments[i, 1]
        bx = segments[i, 2]
        by = segments[i, 3]
        if ay == by:
            continue
        if ay < by:
            direction = 1.0
            p0x, p0y, p1x, p1y = ax, ay, bx, by
        else:
            direction = -1.0
            p0x, p0y, p1x, p1y = bx, by, ax, ay
        dxdy = (p1x - p0x) / (p1y - p0y)
        x = p0x
        y_start = int(max(0.0, p0y))
        if p0y < 0.0:
            x -= p0y * dxdy
        x_next = x
        y_end = min(h, int(math.ceil(p1y)))
        for y in range(y_start, y_end):
            x = x_next
            dy = min(y + 1.0, p1y) - max(float(y), p0y)
            d = direction * dy
            x_next = x + dxdy * dy
            if x < x_next:
                x0, x1 = x, x_next
            else:
                x0, x1 = x_next, x
            x0_floor = math.floor(x0)
            x0i = int(x0_floor)
            x1_ceil = math.ceil(x1)
            x1i = int(x1_ceil)
            if x1i <= x0i + 1:
                # 1 画素内で完結する
                xmf = 0.5 * (x + x_next) - x0_floor
                if x0i >= w:
                    continue
                trace[y, max(x0i, 0)] += d * (1.0 - xmf)
                xi = x0i + 1
                if xi >= w:
                    continue
                trace[y, max(xi, 0)] += d * xmf
            else:
                s = 1.0 / (x1 - x0)
                x0f = x0 - x0_floor
                x1f = x1 - x1_ceil + 1.0
                a0 = 0.5 * s * (1.0 - x0f) ** 2
                am = 0.5 * s * x1f**2
                if x0i >= w:
                    continue
                trace[y, max(x0i, 0)] += d * a0
                if x1i == x0i + 2:
                    xi = x0i + 1
                    if xi >= w:
                        continue
                    trace[y, max(xi, 0)] += d * (1.0 - a0 - am)
                else:
                    a1 = s * (1.5 - x0f)
                    xi = x0i + 1
                    if xi >= w:
                        continue
                    trace[y, max(xi, 0)] += d * (a1 - a0)
                    for xi in range(x0i + 2, x1i - 1):
                        if xi >= w:
                            break
                        trace[y, max(xi, 0)] += d * s
                    a2 = a1 + (x1i - x0i - 3) * s
                    xi = x1i - 1
                    if xi >= w:
                        continue
                    trace[y, max(xi, 0)] += d * (1.0 - a2 - am)
                if x1i >= w:
                    continue
                trace[y, max(x1i, 0)] += d * am


def contours_to_segments(contours: Iterable[np.ndarray]) -> np.ndarray:
    """輪郭（各 (K, 2)）を暗黙に閉じた線分列 `(N, 4)` へ変換する。"""
    parts: list[np.ndarray] = []
    for pts in contours:
        pts = np.asarray(pts, dtype=np.float64)
        if pts.shape[0] < 2:
            continue
        closed = np.vstack([pts, pts[:1]])
        parts.append(np.hstack([closed[:-1], closed[1:]]))
    if not parts:
        return np.zeros((0, 4), dtype=np.float64)
    return np.ascontiguousarray(np.vstack(parts))


def coverage_mask(
    contours: Sequence[np.ndarray],
    width: int,
    height: int,
    *,
    fill_rule: str = FILL_NONZERO,
    antialias: bool = True,
) -> tuple[np.ndarray, int, int] | None:
    """輪郭群の被覆率マスクを返す。

    返り値:
        `(mask (H', W') float64, x_offset, y_offset)`。マスクはバッファ内に
        クリップした外接矩形ぶんだけを持つ。描画対象が無ければ None。
    """
    if fill_rule not in (FILL_NONZERO, FILL_EVENODD):
        raise ValueError(f"invalid fill rule: {fill_rule!r}")
    segments = contours_to_segments(contours)
    if segments.shape[0] == 0 or not np.all(np.isfinite(segments)):
        return None

    xs = segments[:, 0::2]
    ys = segments[:, 1::2]
    min_x = max(0, int(math.floor(float(xs.min()))))
    min_y = max(0, int(math.floor(float(ys.min()))))
    max_x = min(int(width), int(math.ceil(float(xs.max()))) + 1)
    max_y = min(int(height), int(math.ceil(float(ys.max()))) + 1)
    if max_x <= min_x or max_y <= min_y:
        return None

    local = segments - np.array([min_x, min_y, min_x, min_y], dtype=np.float64)
    trace = np.zeros((max_y - min_y, max_x - min_x), dtype=np.float64)
    accumulate_coverage(trace, local)

    winding = np.cumsum(trace, axis=1)
    if fill_rule == FILL_NONZERO:
        mask = np.clip(np.fabs(winding), 0.0, 1.0)
    else:
        mask = np.fabs(np.remainder(winding + 1.0, 2.0) - 1.0)
    if antialias:
        mask[mask < MIN_COVERAGE] = 0.0
    else:
        mask = (mask >= 0.5).astype(np.float64)
    return mask, min_x, min_y


def composite_over(
    buffer: np.ndarray,
    mask: np.ndarray,
    x_offset: int,
    y_offset: int,
    premultiplied: RGBA8,
) -> None:
    """乗算済み色 `premultiplied` を被覆率 `mask` で `buffer`（(H, W) uint32 ARGB）へ合成する。"""
    h, w = mask.shape
    region = buffer[y_offset : y_offset + h, x_offset : x_offset + w]
    hit = mask > 0.0
    if not np.any(hit):
        return
    dst = region[hit]
    cov = mask[hit]

    sr, sg, sb, sa = (float(c) for c in premultiplied)
    inv = 1.0 - (sa / 255.0) * cov

    def channel(shift: int, src: float) -> np.ndarray:
        d = ((dst >> shift) & 0xFF).astype(np.float64)
        out = src * cov + d * inv
        return np.clip(np.rint(out), 0, 255).astype(np.uint32)

    a = channel(24, sa)
    r = channel(16, sr)
    g = channel(8, sg)
    b = channel(0, sb)
    region[hit] = (a << 24) | (r << 16) | (g << 8) | b


__all__ = [
    "FILL_NONZERO",
    "FILL_EVENODD",
    "accumulate_coverage",
    "contours_to_segments",
    "coverage_mask",
    "composite_over",
]
