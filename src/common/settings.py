"""
どこで: `common.settings`
何を: 描画エンジンの実行時ノブを環境変数から型付きで一元管理する。
なぜ: ラスタライザ/フォント探索で `os.getenv` が散在しないようにし、テストで差し替えやすくするため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_float

ENV_PREFIX = "P5C_"


@dataclass
class _Settings:
    # ラスタライズ
    FLATTEN_TOLERANCE: float = 0.1
    ANTIALIAS: bool = True
    STROKE_MITER_LIMIT: float = 10.0

    # フォント
    DEBUG_FONTS: bool = False


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - 平坦化許容差は極端に小さい値で分割数が爆発しないよう下限を設ける。
    """
    _settings.FLATTEN_TOLERANCE = env_float(
        f"{ENV_PREFIX}FLATTEN_TOLERANCE", 0.1, min_value=1e-3
    )
    _settings.ANTIALIAS = env_bool(f"{ENV_PREFIX}ANTIALIAS", True)
    _settings.STROKE_MITER_LIMIT = env_float(
        f"{ENV_PREFIX}STROKE_MITER_LIMIT", 10.0, min_value=1.0
    )
    _settings.DEBUG_FONTS = env_bool(f"{ENV_PREFIX}DEBUG_FONTS", False)


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings", "ENV_PREFIX"]
