from __future__ import annotations

from engine.core.path import Path, PathBuilder


def line_path(x1: float, y1: float, x2: float, y2: float) -> Path:
    """2 点を結ぶ開いた輪郭（閉じないので塗りの対象にならない）。"""
    pb = PathBuilder()
    pb.move_to(x1, y1)
    pb.line_to(x2, y2)
    return pb.finish()


__all__ = ["line_path"]
