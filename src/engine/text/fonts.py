"""
どこで: `engine.text.fonts`。
何を: フォントカタログ（face ごとの family/weight/italic）と `select_best_match`、読込ハンドル `FontHandle`。
なぜ: `text_font("serif")` などの要求を 1 つの具体的なフォントファイルへ決定的に解決し、
      読み込み結果をキャッシュして毎フレームの文字描画で再解析しないようにするため。

解決規則:
- 汎用キーワード（serif / sans-serif / monospace / cursive / fantasy）は設定
  `fonts.generic.<keyword>` の候補ファミリ列に展開し、カタログに存在する最初のファミリを使う。
- それ以外はファミリ名そのもの（大文字小文字無視）として扱う。
- ファミリ内では `|weight - 要求| + 1000 * (italic 不一致)` が最小の face を選ぶ。
- 見つからなければ `FontNotFoundError`、読込に失敗すれば `FontLoadError`。フォールバックはしない。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Sequence

from fontTools.ttLib import TTCollection, TTFont, TTLibError

from common import settings as _settings
from util.fonts import configured_font_dirs, glob_font_files
from util.utils import config_section

logger = logging.getLogger(__name__)

GENERIC_FAMILIES: tuple[str, ...] = ("serif", "sans-serif", "monospace", "cursive", "fantasy")

ITALIC_MISMATCH_PENALTY = 1000


class FontNotFoundError(FileNotFoundError):
    """要求されたファミリ/スタイルに一致するフォントが無い。"""


class FontLoadError(RuntimeError):
    """一致したフォントファイルの読み込みに失敗した。"""


@dataclass(frozen=True)
class FontProperties:
    """スタイル要求（OS/2 の weight クラスと italic）。"""

    weight: int = 400
    italic: bool = False

    @classmethod
    def bold(cls) -> "FontProperties":
        return cls(weight=700)


@dataclass(frozen=True)
class FontFace:
    path: Path
    index: int
    family: str
    subfamily: str
    weight: int
    italic: bool


@dataclass(frozen=True)
class FontHandle:
    """解決済みの face。`load()` で `TTFont` を得る。"""

    face: FontFace

    @property
    def family(self) -> str:
        return self.face.family

    def load(self) -> TTFont:
        return _load_font(str(self.face.path), self.face.index)


@lru_cache(maxsize=32)
def _load_font(path: str, index: int) -> TTFont:
    try:
        if path.lower().endswith(".ttc"):
            return TTFont(path, fontNumber=index)
        return TTFont(path)
    except (OSError, TTLibError, AssertionError) as e:
        raise FontLoadError(f"failed to load font {path} (index {index}): {e}") from e


def _name(font: TTFont, *name_ids: int) -> str | None:
    table = font.get("name")
    if table is None:
        return None
    for nid in name_ids:
        value = table.getDebugName(nid)
        if value:
            return str(value).strip()
    return None


def _describe(font: TTFont, path: Path, index: int) -> FontFace:
    family = _name(font, 16, 1) or path.stem
    subfamily = _name(font, 17, 2) or "Regular"
    weight = 400
    italic = False
    os2 = font.get("OS/2")
    if os2 is not None:
        weight = int(getattr(os2, "usWeightClass", 400) or 400)
        italic = bool(getattr(os2, "fsSelection", 0) & 0x01)
    head = font.get("head")
    if head is not None and not italic:
        italic = bool(getattr(head, "macStyle", 0) & 0x02)
    return FontFace(path, index, family, subfamily, weight, italic)


def read_faces(path: Path) -> list[FontFace]:
    """1 ファイルの face 一覧（.ttc は全 face）。解析できないファイルは空リスト。"""
    faces: list[FontFace] = []
    try:
        if path.suffix.lower() == ".ttc":
            coll = TTCollection(str(path), lazy=True)
            try:
                for idx, font in enumerate(coll.fonts):
                    faces.append(_describe(font, path, idx))
            finally:
                coll.close()
        else:
            font = TTFont(str(path), lazy=True)
            try:
                faces.append(_describe(font, path, 0))
            finally:
                font.close()
    except (OSError, TTLibError, AssertionError, KeyError) as e:
        logger.debug("font skipped: %s (%s)", path, e)
    return faces


def build_catalog(dirs: Iterable[Path]) -> list[FontFace]:
    """ディレクトリ群を走査して face カタログを作る（ファイル順は安定ソート）。"""
    catalog: list[FontFace] = []
    for fp in glob_font_files(dirs):
        catalog.extend(read_faces(fp))
    if _settings.get().DEBUG_FONTS:
        logger.info("font catalog: %d face(s)", len(catalog))
    return catalog


_catalog: list[FontFace] | None = None


def font_catalog() -> list[FontFace]:
    """設定ディレクトリから構築したカタログ（初回のみ走査）。"""
    global _catalog
    if _catalog is None:
        _catalog = build_catalog(configured_font_dirs())
    return _catalog


def clear_font_cache() -> None:
    """カタログと読込キャッシュを破棄する（テスト/フォント追加時）。"""
    global _catalog
    _catalog = None
    _load_font.cache_clear()


def generic_candidates(keyword: str) -> list[str]:
    """汎用キーワードの候補ファミリ列（設定 `fonts.generic`）。"""
    generic = config_section("fonts").get("generic", {})
    if not isinstance(generic, dict):
        return []
    raw = generic.get(keyword, [])
    if isinstance(raw, str):
        raw = [raw]
    return [str(v) for v in raw]


def _family_faces(catalog: Sequence[FontFace], family: str) -> list[FontFace]:
    key = family.strip().lower()
    return [f for f in catalog if f.family.lower() == key]


def select_best_match(
    family: str,
    properties: FontProperties | None = None,
    *,
    catalog: Sequence[FontFace] | None = None,
) -> FontHandle:
    """ファミリ名または汎用キーワードとスタイル要求から最良の face を選ぶ。

    Raises
    ------
    FontNotFoundError
        一致するファミリが 1 つも無い場合。
    """
    props = properties or FontProperties()
    faces_all = list(font_catalog() if catalog is None else catalog)

    if family.strip().lower() in GENERIC_FAMILIES:
        candidates = generic_candidates(family.strip().lower())
    else:
        candidates = [family]

    faces: list[FontFace] = []
    for name in candidates:
        faces = _family_faces(faces_all, name)
        if faces:
            break
    if not faces:
        raise FontNotFoundError(f"no font matches family {family!r} (tried {candidates})")

    def score(f: FontFace) -> int:
        return abs(f.weight - int(props.weight)) + ITALIC_MISMATCH_PENALTY * int(
            f.italic != bool(props.italic)
        )

    best = min(faces, key=score)
    if _settings.get().DEBUG_FONTS:
        logger.info(
            "font %r -> %s %s (%s#%d)", family, best.family, best.subfamily, best.path, best.index
        )
    return FontHandle(best)


__all__ = [
    "GENERIC_FAMILIES",
    "FontNotFoundError",
    "FontLoadError",
    "FontProperties",
    "FontFace",
    "FontHandle",
    "read_faces",
    "build_catalog",
    "font_catalog",
    "clear_font_cache",
    "generic_candidates",
    "select_best_match",
]
