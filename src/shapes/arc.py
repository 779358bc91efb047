"""
どこで: `shapes.arc`。
何を: 楕円弧 `Arc` を二次ベジェ列へ平坦化し、`PathBuilder` へ流し込む。
なぜ: 楕円（360°）と角丸矩形（90°）の双方が同じ弧近似を使い、
      ラスタライザ側は二次ベジェだけを扱えば済むようにするため。

近似方針:
- 掃引角を `π/4` 以下の等分に分割する（360° → 8 区間、90° → 2 区間）。
- 各区間の制御点は両端の接線の交点。軸平行楕円は円のアフィン像なので
  中点角 m・半区間角 h に対して `center + (rx*cos(m)/cos(h), ry*sin(m)/cos(h))` で閉形式に求まる。
- 全周（|sweep| = 2π）の終点は始点へスナップし、輪郭が厳密に閉じるようにする。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from engine.core.path import PathBuilder

MAX_SEGMENT_SWEEP = math.pi / 4.0
TAU = 2.0 * math.pi


@dataclass(frozen=True)
class Arc:
    cx: float
    cy: float
    rx: float
    ry: float
    start_angle: float = 0.0
    sweep_angle: float = TAU

    def sample(self, angle: float) -> tuple[float, float]:
        return (
            self.cx + self.rx * math.cos(angle),
            self.cy + self.ry * math.sin(angle),
        )

    def from_point(self) -> tuple[float, float]:
        return self.sample(self.start_angle)

    def to_point(self) -> tuple[float, float]:
        if self.is_full_turn:
            return self.from_point()
        return self.sample(self.start_angle + self.sweep_angle)

    @property
    def is_full_turn(self) -> bool:
        return abs(self.sweep_angle) >= TAU

    def quadratic_segments(self) -> list[tuple[float, float, float, float]]:
        """`(cx, cy, x, y)` の列（制御点と終点）を返す。掃引 0 なら空。"""
        sweep = float(self.sweep_angle)
        if sweep == 0.0:
            return []
        n = max(1, int(math.ceil(abs(sweep) / MAX_SEGMENT_SWEEP - 1e-9)))
        step = sweep / n
        half = step / 2.0
        inv_cos_half = 1.0 / math.cos(half)
        out: list[tuple[float, float, float, float]] = []
        for i in range(n):
            a1 = self.start_angle + step * i
            mid = a1 + half
            ctrl_x = self.cx + self.rx * math.cos(mid) * inv_cos_half
            ctrl_y = self.cy + self.ry * math.sin(mid) * inv_cos_half
            if i == n - 1:
                to_x, to_y = self.to_point()
            else:
                to_x, to_y = self.sample(a1 + step)
            out.append((ctrl_x, ctrl_y, to_x, to_y))
        return out


def append_arc(pb: PathBuilder, arc: Arc) -> PathBuilder:
    """現在点から弧の二次ベジェ列を追加する（始点への移動は呼び出し側の責務）。"""
    for cx, cy, x, y in arc.quadratic_segments():
        pb.quad_to(cx, cy, x, y)
    return pb


__all__ = ["Arc", "append_arc", "MAX_SEGMENT_SWEEP"]
