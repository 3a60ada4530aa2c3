from __future__ import annotations

from pathlib import Path

import pytest

from disk_search.config import CONFIG


@pytest.fixture
def make_tree(tmp_path: Path):
    """Create files (and their parent directories) under tmp_path/root."""

    def _make(*relative_paths: str) -> Path:
        root = tmp_path / "root"
        root.mkdir(exist_ok=True)
        for rel in relative_paths:
            target = root / rel
            if rel.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text("x", encoding="utf-8")
        return root

    return _make


@pytest.fixture
def config(tmp_path: Path) -> dict:
    root = tmp_path / "root"
    root.mkdir(exist_ok=True)
    cfg = dict(CONFIG)
    cfg.update(
        {
            "root_folder": str(root),
            "skip_directory": "Library",
            "index_path": str(tmp_path / "config" / "new_index.json"),
            "startup_delay_seconds": 0,
        }
    )
    return cfg
