from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pytest


@pytest.mark.integration
# - src/ だけを sys.path に置いた新しいインタプリタで `api` を import できること
# - ウィンドウを作らない限り pyglet は import されないこと
def test_api_imports_from_src_without_pyglet():
    for mod in ("numpy", "numba", "shapely", "fontTools", "yaml"):
        pytest.importorskip(mod)
    repo_root = Path(__file__).resolve().parents[2]
    src_dir = repo_root / "src"
    script = (
        "import sys, importlib\n"
        "from pathlib import Path\n"
        f"src = Path(r'{src_dir}')\n"
        f"repo = Path(r'{repo_root}')\n"
        "sys.path[:] = [str(src)] + [p for p in sys.path if p and Path(p).resolve() != repo.resolve()]\n"
        "m = importlib.import_module('api')\n"
        "assert hasattr(m, 'Canvas') and hasattr(m, 'Sketch') and hasattr(m, 'run')\n"
        "p5 = m.run_sketch(m.Sketch(), init_only=True)\n"
        "assert p5.get_data().shape == (p5.width * p5.height,)\n"
        "assert 'pyglet' not in sys.modules, 'pyglet imported eagerly'\n"
    )
    proc = subprocess.run([sys.executable, "-c", script], capture_output=True, text=True)
    assert proc.returncode == 0, proc.stderr


@pytest.mark.integration
# - ルート config.yaml は configs/default.yaml のトップレベルキーを上書きする
def test_load_config_root_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    import util.utils as uu

    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text(
        "sketch:\n  width: 400\nfonts:\n  include_os: true\n", encoding="utf-8"
    )
    (tmp_path / "config.yaml").write_text("sketch:\n  height: 90\n", encoding="utf-8")
    monkeypatch.setattr(uu, "_find_project_root", lambda start: tmp_path)
    cfg = uu.load_config()
    # ディープマージはしない
    assert cfg["sketch"] == {"height": 90}
    assert cfg["fonts"] == {"include_os": True}
