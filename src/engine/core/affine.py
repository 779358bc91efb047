"""
どこで: `engine.core.affine`。
何を: 2D アフィン変換 `Affine2x3`（6 係数）と、その合成・点列への適用を提供。
なぜ: 描画状態が保持する「現在の変換」を 1 つの不変値として扱い、
      translate/rotate/scale/shear をすべて `then()` による後置合成へ還元するため。

係数の意味（行ベクトル規約）:

    x' = x*m11 + y*m21 + m31
    y' = x*m12 + y*m22 + m32

合成規約:
- `a.then(b)` は「a を適用した結果に b を適用する」変換を返す。
- 描画状態は `transform = transform.then(new)` で積み上げる。発行順に効き、
  フレーム毎のリセットまで以降のすべての図形に適用される。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

# これを超える |tan| はせん断なし（0）として扱う
SHEAR_TAN_LIMIT = 1.0e6


def _shear_tan(angle: float) -> float:
    t = math.tan(float(angle))
    if not math.isfinite(t) or abs(t) > SHEAR_TAN_LIMIT:
        return 0.0
    return t


@dataclass(frozen=True)
class Affine2x3:
    m11: float = 1.0
    m12: float = 0.0
    m21: float = 0.0
    m22: float = 1.0
    m31: float = 0.0
    m32: float = 0.0

    # ── ファクトリ ───────────────────
    @classmethod
    def identity(cls) -> "Affine2x3":
        return cls()

    @classmethod
    def translation(cls, tx: float, ty: float) -> "Affine2x3":
        return cls(1.0, 0.0, 0.0, 1.0, float(tx), float(ty))

    @classmethod
    def scaling(cls, sx: float, sy: float | None = None) -> "Affine2x3":
        sy = sx if sy is None else sy
        return cls(float(sx), 0.0, 0.0, float(sy), 0.0, 0.0)

    @classmethod
    def rotation(cls, angle: float) -> "Affine2x3":
        """原点回りの回転（ラジアン、画面座標で時計回りが正）。"""
        c = math.cos(float(angle))
        s = math.sin(float(angle))
        return cls(c, s, -s, c, 0.0, 0.0)

    @classmethod
    def shearing_x(cls, angle: float) -> "Affine2x3":
        """x 方向せん断 `x' = x + y*tan(angle)`。90° 付近は 0 にクランプ。"""
        return cls(1.0, 0.0, _shear_tan(angle), 1.0, 0.0, 0.0)

    @classmethod
    def shearing_y(cls, angle: float) -> "Affine2x3":
        """y 方向せん断 `y' = x*tan(angle) + y`。90° 付近は 0 にクランプ。"""
        return cls(1.0, _shear_tan(angle), 0.0, 1.0, 0.0, 0.0)

    # ── 合成/適用（すべて純粋） ──────
    def then(self, other: "Affine2x3") -> "Affine2x3":
        """self の後に other を適用する変換を返す。"""
        a, b = self, other
        return Affine2x3(
            a.m11 * b.m11 + a.m12 * b.m21,
            a.m11 * b.m12 + a.m12 * b.m22,
            a.m21 * b.m11 + a.m22 * b.m21,
            a.m21 * b.m12 + a.m22 * b.m22,
            a.m31 * b.m11 + a.m32 * b.m21 + b.m31,
            a.m31 * b.m12 + a.m32 * b.m22 + b.m32,
        )

    def apply_point(self, x: float, y: float) -> tuple[float, float]:
        return (
            x * self.m11 + y * self.m21 + self.m31,
            x * self.m12 + y * self.m22 + self.m32,
        )

    def apply(self, points: np.ndarray) -> np.ndarray:
        """(N, 2) 点列に適用した新しい配列を返す。"""
        pts = np.asarray(points, dtype=np.float64)
        if pts.size == 0:
            return pts.reshape(0, 2)
        linear = np.array([[self.m11, self.m12], [self.m21, self.m22]], dtype=np.float64)
        return pts @ linear + np.array([self.m31, self.m32], dtype=np.float64)

    def as_tuple(self) -> tuple[float, float, float, float, float, float]:
        return (self.m11, self.m12, self.m21, self.m22, self.m31, self.m32)

    @property
    def is_identity(self) -> bool:
        return self.as_tuple() == (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)

    def approx_equals(self, other: "Affine2x3", tol: float = 1e-9) -> bool:
        return all(abs(p - q) <= tol for p, q in zip(self.as_tuple(), other.as_tuple()))


IDENTITY = Affine2x3()


__all__ = ["Affine2x3", "IDENTITY", "SHEAR_TAN_LIMIT"]
