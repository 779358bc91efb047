"""
アーキテクチャテスト

目的:
- 数値レイヤ（外側→内側のみ許可、同層は許可）
- 個別禁止エッジ（engine は api/shapes を知らない、shapes は描画系を知らない）
- 循環 import が無いこと
"""

from __future__ import annotations

import ast
import pathlib
from typing import Dict, Iterator, List, Optional, Set, Tuple

import pytest

REPO_ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"

# L0: 基盤/値型, L1: 図形, L2: ラスタ/文字/実行時, L3: 公開 API
LAYER_MAP = {
    ("common",): 0,
    ("util",): 0,
    ("engine", "color"): 0,
    ("engine", "core"): 0,
    ("shapes",): 1,
    ("engine", "render"): 2,
    ("engine", "text"): 2,
    ("engine", "runtime"): 2,
    ("api",): 3,
}

CHECK_ROOTS = {"api", "engine", "shapes", "common", "util"}
SHAPES_FORBIDDEN_SUBS = {"render", "text", "runtime"}


def iter_py_files(root: pathlib.Path) -> Iterator[pathlib.Path]:
    for p in root.rglob("*.py"):
        if "__pycache__" in p.parts:
            continue
        yield p


def module_name_from_path(path: pathlib.Path) -> str:
    rel = path.relative_to(SRC_DIR).with_suffix("")
    parts = rel.parts[:-1] if rel.parts[-1] == "__init__" else rel.parts
    return ".".join(parts)


def split_head(module: str) -> tuple[str, Optional[str]]:
    parts = module.split(".") if module else []
    if not parts:
        return "", None
    return parts[0], parts[1] if len(parts) > 1 else None


def layer_of(module: str) -> Optional[int]:
    head, second = split_head(module)
    if head == "engine" and second:
        return LAYER_MAP.get((head, second))
    return LAYER_MAP.get((head,)) if head else None


def iter_import_edges(py_path: pathlib.Path) -> Iterator[Tuple[str, str]]:
    src_mod = module_name_from_path(py_path)
    is_pkg = py_path.name == "__init__.py"
    tree = ast.parse(py_path.read_text(encoding="utf-8"), filename=str(py_path))
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield src_mod, alias.name
        elif isinstance(node, ast.ImportFrom):
            if node.level > 0:
                src_parts = src_mod.split(".")
                drop = node.level - 1 if is_pkg else node.level
                base = ".".join(src_parts[: len(src_parts) - drop])
                mod = node.module or ""
                yield src_mod, f"{base}.{mod}" if mod else base
            else:
                yield src_mod, node.module or ""


def is_forbidden_edge(src: str, tgt: str) -> bool:
    s_head, _ = split_head(src)
    t_head, t_sec = split_head(tgt)
    if s_head == "engine" and t_head in {"api", "shapes"}:
        return True
    if s_head == "shapes" and t_head == "engine" and t_sec in SHAPES_FORBIDDEN_SUBS:
        return True
    return False


def collect_graph_and_violations() -> tuple[Dict[str, Set[str]], list[str], list[str]]:
    layering: list[str] = []
    forbidden: list[str] = []
    graph: Dict[str, Set[str]] = {}
    py_files: List[pathlib.Path] = list(iter_py_files(SRC_DIR))
    for py in py_files:
        graph.setdefault(module_name_from_path(py), set())

    for py in py_files:
        for src, tgt in iter_import_edges(py):
            if split_head(src)[0] not in CHECK_ROOTS or split_head(tgt)[0] not in CHECK_ROOTS:
                continue
            s_layer, t_layer = layer_of(src), layer_of(tgt)
            if s_layer is not None and t_layer is not None and s_layer < t_layer:
                layering.append(f"[{py}] {src} (L{s_layer}) -> {tgt} (L{t_layer})")
            if is_forbidden_edge(src, tgt):
                forbidden.append(f"[{py}] {src} -> {tgt}")
            if tgt in graph and tgt != src:
                graph[src].add(tgt)
    return graph, layering, forbidden


def find_cycles(graph: Dict[str, Set[str]]) -> List[List[str]]:
    cycles: List[List[str]] = []
    WHITE, GRAY, BLACK = 0, 1, 2
    color: Dict[str, int] = {u: WHITE for u in graph}
    stack: List[str] = []

    def dfs(u: str) -> None:
        color[u] = GRAY
        stack.append(u)
        for v in sorted(graph.get(u, ())):
            if color[v] == WHITE:
                dfs(v)
            elif color[v] == GRAY:
                cycles.append(stack[stack.index(v) :] + [v])
        stack.pop()
        color[u] = BLACK

    for node in sorted(graph):
        if color[node] == WHITE:
            dfs(node)
    return cycles


@pytest.mark.smoke
def test_import_layers_and_cycles() -> None:
    graph, layering, forbidden = collect_graph_and_violations()
    cycles = find_cycles(graph)
    msgs: list[str] = []
    if layering:
        msgs.append("Layer violations:\n" + "\n".join(layering))
    if forbidden:
        msgs.append("Forbidden edges:\n" + "\n".join(forbidden))
    if cycles:
        msgs.append("Cycles:\n" + "\n".join(" -> ".join(c) for c in cycles))
    assert not msgs, "\n\n".join(msgs)

