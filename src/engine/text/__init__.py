"""
どこで: `engine.text` サブパッケージ。
何を: フォント解決（カタログ/select_best_match）とグリフ → Path 変換を提供。
なぜ: 文字描画に必要なフォント依存（fontTools）をこの層に閉じ込めるため。
"""

from .fonts import (
    GENERIC_FAMILIES,
    FontHandle,
    FontLoadError,
    FontNotFoundError,
    FontProperties,
    select_best_match,
)
from .glyphs import text_path

__all__ = [
    "GENERIC_FAMILIES",
    "FontHandle",
    "FontLoadError",
    "FontNotFoundError",
    "FontProperties",
    "select_best_match",
    "text_path",
]
