"""
どこで: `engine.render` サブパッケージ。
何を: ラスタバックエンドの境界（RasterBackend）と CPU 実装（PixelBackend）、カバレッジ/ストロークの下請けを提供。
なぜ: パス生成/描画状態とピクセル化の責務を分離し、合成処理を局所化するため。
"""

from .backend import RasterBackend
from .pixel_backend import PixelBackend
from .raster import FILL_EVENODD, FILL_NONZERO

__all__ = ["RasterBackend", "PixelBackend", "FILL_NONZERO", "FILL_EVENODD"]
