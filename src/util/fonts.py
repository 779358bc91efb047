"""
どこで: `util.fonts`。
何を: フォントファイル探索の共通ユーティリティ（検索ディレクトリの正規化、OS 既定ディレクトリ、再帰列挙）。
なぜ: カタログ構築（`engine.text.fonts`）からファイルシステム依存の処理を切り出し、テストで差し替えやすくするため。
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Iterable, Sequence

from .utils import _find_project_root, config_section

logger = logging.getLogger(__name__)

EXTS_DEFAULT: tuple[str, ...] = (".ttf", ".otf", ".ttc")


def resolve_search_dirs(cfg_dirs: Sequence[str | Path] | str | Path) -> list[Path]:
    """設定由来の検索ディレクトリを正規化して返す（相対→ルート基準、~・環境変数を展開）。

    存在しないディレクトリは黙って除外する。
    """
    if isinstance(cfg_dirs, (str, Path)):
        cfg_dirs = [cfg_dirs]
    root = _find_project_root(Path(__file__).parent)
    result: list[Path] = []
    for raw in cfg_dirs:
        if not isinstance(raw, (str, Path)):
            continue
        p = Path(os.path.expandvars(os.path.expanduser(str(raw))))
        if not p.is_absolute():
            p = (root / p).resolve()
        if p.is_dir():
            result.append(p)
    return result


def os_font_dirs() -> list[Path]:
    """OS 既定のフォントディレクトリ一覧（存在するもののみ）。"""
    home = Path.home()
    dirs: list[Path] = []
    if sys.platform == "darwin":
        dirs = [
            home / "Library" / "Fonts",
            Path("/System/Library/Fonts"),
            Path("/System/Library/Fonts/Supplemental"),
            Path("/Library/Fonts"),
        ]
    elif sys.platform.startswith("linux"):
        dirs = [
            Path("/usr/share/fonts"),
            Path("/usr/local/share/fonts"),
            home / ".fonts",
            home / ".local/share/fonts",
        ]
    else:
        windir = os.environ.get("WINDIR", r"C:\\Windows")
        dirs = [Path(windir) / "Fonts"]
    return [p for p in dirs if p.exists()]


def glob_font_files(dirs: Iterable[Path], exts: Sequence[str] | None = None) -> list[Path]:
    """与えられたディレクトリ配下のフォントファイルを再帰列挙（重複除去/安定ソート）。

    拡張子は大文字小文字を区別しない。読めないディレクトリは飛ばす。
    """
    suffixes = tuple(e.lower() for e in (exts if exts is not None else EXTS_DEFAULT))
    seen: set[Path] = set()
    for d in dirs:
        try:
            for fp in d.rglob("*"):
                if fp.suffix.lower() in suffixes and fp.is_file():
                    seen.add(fp.resolve())
        except OSError as e:
            logger.debug("font dir skipped: %s (%s)", d, e)
    return sorted(seen)


def configured_font_dirs() -> list[Path]:
    """`fonts.search_dirs` と（`fonts.include_os` が真なら）OS 既定ディレクトリを順に返す。"""
    cfg = config_section("fonts")
    dirs = resolve_search_dirs(cfg.get("search_dirs", []) or [])
    if bool(cfg.get("include_os", True)):
        dirs.extend(os_font_dirs())
    return dirs


__all__ = [
    "EXTS_DEFAULT",
    "resolve_search_dirs",
    "os_font_dirs",
    "glob_font_files",
    "configured_font_dirs",
]
