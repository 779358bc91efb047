"""
どこで: `util.utils`。
何を: `configs/default.yaml` とルート `config.yaml` を重ねた設定辞書の読み込み。
なぜ: スケッチ既定値やフォント探索先を環境ごとに差し替えつつ、設定の欠落や破損では
      描画を止めないため（常に辞書を返す）。

重ね方はトップレベルのキー単位で、後の層が前の層を丸ごと置き換える（ネストのマージはしない）。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)

_ROOT_MARKERS = (".git", "pyproject.toml", "configs")
# 下の層ほど優先（ルート相対）
_CONFIG_LAYERS = (Path("configs") / "default.yaml", Path("config.yaml"))


def _safe_load_yaml(path: Path) -> Dict[str, Any]:
    """YAML を辞書として読む。読めない/マッピングでない場合は空辞書。"""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError:
        return {}
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        logger.warning("config ignored: %s (%s)", path, e)
        return {}
    if not isinstance(data, dict):
        if data is not None:
            logger.warning("config ignored: %s is not a mapping", path)
        return {}
    return data


def _find_project_root(start: Path) -> Path:
    """`start` から上へ辿り、最初にマーカーを持つディレクトリを返す。

    見つからなければ `start.parent.parent`（`<root>/src/util` を想定）を返す。
    """
    cur = start.resolve()
    for candidate in (cur, *cur.parents):
        if any((candidate / m).exists() for m in _ROOT_MARKERS):
            return candidate
    return cur.parent.parent


def load_config() -> Dict[str, Any]:
    """全層を重ねた設定辞書を返す。どの層も無ければ空辞書。"""
    root = _find_project_root(Path(__file__).parent)
    merged: Dict[str, Any] = {}
    for rel in _CONFIG_LAYERS:
        path = root / rel
        if path.is_file():
            merged.update(_safe_load_yaml(path))
    return merged


def config_section(name: str) -> Dict[str, Any]:
    """`load_config()` の 1 セクション。欠落や型不一致は空辞書。"""
    section = load_config().get(name)
    return section if isinstance(section, dict) else {}
