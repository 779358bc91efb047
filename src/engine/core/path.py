"""
どこで: `engine.core.path`。
何を: ローカル座標の描画コマンド列 `Path`（move/line/quad/close）と、その組み立て用 `PathBuilder`。
なぜ: 形状生成（shapes）・変換（Affine2x3）・ラスタライズ（render）の境界を 1 種類の値に揃えるため。

データモデル:
- `Path.commands: tuple[(Verb, tuple[float, ...]), ...]`
  - `MOVE (x, y)` / `LINE (x, y)` / `QUAD (cx, cy, x, y)` / `CLOSE ()`
- 1 つの Path は複数の輪郭（開/閉）を含み得る。
- Path は 1 回の図形描画の中で生成・消費される一時値（不変）。

平坦化:
- `Path.flatten(tolerance)` は各輪郭を `(points (K,2) float64, closed)` の列に変換する。
- 二次ベジェは弦からの最大偏差が `tolerance` 以下になるよう均等分割する
  （`B''` が定数のため `n = ceil(sqrt(|p0 - 2c + p1| / (4 * tol)))`）。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

import numpy as np

from .affine import Affine2x3


class Verb(Enum):
    MOVE = "M"
    LINE = "L"
    QUAD = "Q"
    CLOSE = "Z"


Command = tuple[Verb, tuple[float, ...]]
Contour = tuple[np.ndarray, bool]


@dataclass(frozen=True)
class Path:
    commands: tuple[Command, ...] = ()

    def __iter__(self) -> Iterator[Command]:
        return iter(self.commands)

    def __len__(self) -> int:
        return len(self.commands)

    def __bool__(self) -> bool:
        return any(verb is not Verb.CLOSE for verb, _ in self.commands)

    @property
    def verbs(self) -> tuple[Verb, ...]:
        return tuple(verb for verb, _ in self.commands)

    def transform(self, tf: Affine2x3) -> "Path":
        """全ての端点と制御点に `tf` を適用した新しい Path を返す。"""
        if tf.is_identity:
            return self
        out: list[Command] = []
        for verb, args in self.commands:
            if verb is Verb.CLOSE:
                out.append((verb, args))
                continue
            pts = []
            for i in range(0, len(args), 2):
                pts.extend(tf.apply_point(args[i], args[i + 1]))
            out.append((verb, tuple(pts)))
        return Path(tuple(out))

    def points(self) -> np.ndarray:
        """端点・制御点を出現順に (N, 2) で返す（検査/バウンディング用）。"""
        flat: list[float] = []
        for verb, args in self.commands:
            if verb is not Verb.CLOSE:
                flat.extend(args)
        return np.asarray(flat, dtype=np.float64).reshape(-1, 2)

    def bounds(self) -> tuple[float, float, float, float] | None:
        """制御点を含む外接矩形 `(min_x, min_y, max_x, max_y)`。空なら None。"""
        pts = self.points()
        if pts.size == 0:
            return None
        mn = pts.min(axis=0)
        mx = pts.max(axis=0)
        return (float(mn[0]), float(mn[1]), float(mx[0]), float(mx[1]))

    def flatten(self, tolerance: float = 0.1) -> list[Contour]:
        """曲線を折れ線へ平坦化し、輪郭ごとの `(points, closed)` を返す。"""
        tol = max(float(tolerance), 1e-6)
        contours: list[Contour] = []
        cur: list[tuple[float, float]] = []
        start: tuple[float, float] | None = None

        for verb, args in self.commands:
            if verb is Verb.MOVE:
                # 2 点未満の輪郭は面積も長さも持たないので捨てる
                if len(cur) > 1:
                    contours.append((np.asarray(cur, dtype=np.float64), False))
                start = (args[0], args[1])
                cur = [start]
            elif verb is Verb.LINE:
                if not cur:
                    start = (args[0], args[1])
                    cur = [start]
                else:
                    cur.append((args[0], args[1]))
            elif verb is Verb.QUAD:
                if not cur:
                    start = (args[2], args[3])
                    cur = [start]
                else:
                    cur.extend(
                        _flatten_quad(cur[-1], (args[0], args[1]), (args[2], args[3]), tol)
                    )
            elif verb is Verb.CLOSE:
                if len(cur) > 1:
                    contours.append((np.asarray(cur, dtype=np.float64), True))
                # 閉じた後の描画は輪郭の始点から再開する
                cur = [start] if start is not None else []
        if len(cur) > 1:
            contours.append((np.asarray(cur, dtype=np.float64), False))
        return contours


def _flatten_quad(
    p0: tuple[float, float],
    c: tuple[float, float],
    p1: tuple[float, float],
    tol: float,
) -> list[tuple[float, float]]:
    ddx = p0[0] - 2.0 * c[0] + p1[0]
    ddy = p0[1] - 2.0 * c[1] + p1[1]
    dd = math.hypot(ddx, ddy)
    n = max(1, int(math.ceil(math.sqrt(dd / (4.0 * tol)))))
    out: list[tuple[float, float]] = []
    for i in range(1, n + 1):
        t = i / n
        mt = 1.0 - t
        x = mt * mt * p0[0] + 2.0 * mt * t * c[0] + t * t * p1[0]
        y = mt * mt * p0[1] + 2.0 * mt * t * c[1] + t * t * p1[1]
        out.append((x, y))
    return out


class PathBuilder:
    """Path をコマンド単位で組み立てる可変ビルダ。

    - 現在点が無い状態での `line_to` は `move_to` として扱う。
    - `finish()` で不変の `Path` を返す（ビルダは以後も再利用可能）。
    """

    def __init__(self) -> None:
        self._commands: list[Command] = []
        self._has_current = False

    def move_to(self, x: float, y: float) -> "PathBuilder":
        self._commands.append((Verb.MOVE, (float(x), float(y))))
        self._has_current = True
        return self

    def line_to(self, x: float, y: float) -> "PathBuilder":
        if not self._has_current:
            return self.move_to(x, y)
        self._commands.append((Verb.LINE, (float(x), float(y))))
        return self

    def quad_to(self, cx: float, cy: float, x: float, y: float) -> "PathBuilder":
        if not self._has_current:
            self.move_to(cx, cy)
        self._commands.append((Verb.QUAD, (float(cx), float(cy), float(x), float(y))))
        return self

    def close(self) -> "PathBuilder":
        if self._has_current:
            self._commands.append((Verb.CLOSE, ()))
        return self

    def finish(self) -> Path:
        return Path(tuple(self._commands))


__all__ = ["Verb", "Command", "Contour", "Path", "PathBuilder"]
