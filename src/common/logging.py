"""
どこで: `common.logging`。
何を: スケッチ実行時に 1 度だけ適用するロギング初期化。
なぜ: 各モジュールは `logging.getLogger(__name__)` だけを使い、ハンドラとレベルの決定を
      `run_sketch` に集約するため。

レベルの決まり方:
- 引数 `level`（既定 None）→ 環境変数 `P5C_LOG_LEVEL` → INFO の順に採用する。
- 未知のレベル名は INFO 扱い。
- numba / fontTools は DEBUG でも大量に出力するため WARNING 以上に絞る。
"""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_NOISY_LOGGERS = ("numba", "fontTools")


def resolve_level(level: int | str | None = None) -> int:
    """`level` を logging のレベル値へ解決する。"""
    if level is None:
        level = os.environ.get("P5C_LOG_LEVEL", "INFO")
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else logging.INFO


def setup_default_logging(level: int | str | None = None) -> bool:
    """ルートロガーが未設定のときだけ basicConfig を適用する。

    アプリ側が既にハンドラを付けていれば何もせず False を返す。
    """
    root = logging.getLogger()
    if root.handlers:
        return False
    logging.basicConfig(level=resolve_level(level), format=LOG_FORMAT)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return True


__all__ = ["LOG_FORMAT", "resolve_level", "setup_default_logging"]
