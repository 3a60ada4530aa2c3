from __future__ import annotations

import os
from pathlib import Path

import pytest

from disk_search.indexer import build_index
from disk_search.indexer import walker


def test_every_entry_is_indexed_by_name_with_absolute_path(make_tree) -> None:
    root = make_tree("a.txt", "docs/b.md", "docs/deep/c.py", "empty/")

    index = build_index(str(root), "Library")

    assert dict(index.items()) == {
        "a.txt": str(root / "a.txt"),
        "docs": str(root / "docs"),
        "b.md": str(root / "docs" / "b.md"),
        "deep": str(root / "docs" / "deep"),
        "c.py": str(root / "docs" / "deep" / "c.py"),
        "empty": str(root / "empty"),
    }
    assert all(os.path.isabs(path) for _, path in index.items())


def test_relative_root_produces_absolute_paths(make_tree, monkeypatch) -> None:
    root = make_tree("a.txt")
    monkeypatch.chdir(root.parent)

    index = build_index("root", None)

    assert index.get("a.txt") == str(root / "a.txt")


def test_skipped_directory_and_its_subtree_are_omitted_at_any_depth(make_tree) -> None:
    root = make_tree(
        "Library/top.txt",
        "home/alice/Library/Caches/cache.db",
        "home/alice/notes.txt",
    )

    index = build_index(str(root), "Library")

    assert "Library" not in index
    assert "top.txt" not in index
    assert "Caches" not in index
    assert "cache.db" not in index
    assert index.get("notes.txt") == str(root / "home" / "alice" / "notes.txt")
    assert index.get("alice") == str(root / "home" / "alice")


def test_skip_name_match_is_case_sensitive(make_tree) -> None:
    root = make_tree("library/kept.txt")

    index = build_index(str(root), "Library")

    assert "library" in index
    assert "kept.txt" in index


def test_file_named_like_skip_directory_is_indexed(make_tree) -> None:
    root = make_tree("Library")

    index = build_index(str(root), "Library")

    assert index.get("Library") == str(root / "Library")


def test_root_named_like_skip_directory_yields_empty_index(tmp_path: Path) -> None:
    root = tmp_path / "Library"
    (root / "sub").mkdir(parents=True)
    (root / "sub" / "file.txt").write_text("x", encoding="utf-8")

    index = build_index(str(root), "Library")

    assert len(index) == 0


def test_colliding_names_keep_single_entry_from_last_visited(make_tree) -> None:
    root = make_tree("a/report.pdf", "b/report.pdf", "c/x/report.pdf")

    index = build_index(str(root), None)

    assert list(index).count("report.pdf") == 1
    # Name order, depth-first: a/, b/, c/x/ -> c/x wins.
    assert index.get("report.pdf") == str(root / "c" / "x" / "report.pdf")


def test_directory_and_file_sharing_a_name_collapse(make_tree) -> None:
    root = make_tree("src/", "z/src")

    index = build_index(str(root), None)

    assert index.get("src") == str(root / "z" / "src")


def test_unreadable_directory_is_skipped_and_walk_continues(make_tree, monkeypatch, caplog) -> None:
    root = make_tree("locked/secret.txt", "open/visible.txt")
    locked = str(root / "locked")
    real_scandir = os.scandir

    def fake_scandir(path):
        if os.fspath(path) == locked:
            raise PermissionError(13, "Permission denied", locked)
        return real_scandir(path)

    monkeypatch.setattr(walker.os, "scandir", fake_scandir)

    with caplog.at_level("WARNING", logger="DiskSearch.Indexer"):
        index = build_index(str(root), None)

    assert index.get("locked") == locked
    assert "secret.txt" not in index
    assert "visible.txt" in index
    assert "Error reading directory" in caplog.text


def test_missing_root_yields_empty_index(tmp_path: Path) -> None:
    index = build_index(str(tmp_path / "does-not-exist"), None)

    assert len(index) == 0


@pytest.mark.skipif(os.name == "nt", reason="byte file names are POSIX only")
def test_undecodable_name_is_skipped(make_tree, caplog) -> None:
    root = make_tree("good.txt")
    try:
        fd = os.open(os.path.join(os.fsencode(str(root)), b"bad\xff.txt"), os.O_CREAT | os.O_WRONLY)
    except OSError:
        pytest.skip("filesystem rejects non-UTF-8 names")
    os.close(fd)

    with caplog.at_level("WARNING", logger="DiskSearch.Indexer"):
        index = build_index(str(root), None)

    assert list(index) == ["good.txt"]
    assert "undecodable name" in caplog.text


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_symlinked_directories_are_not_followed(make_tree) -> None:
    root = make_tree("real/inside.txt")
    try:
        os.symlink(str(root), str(root / "real" / "loop"))
    except OSError:
        pytest.skip("cannot create symlinks here")

    index = build_index(str(root), None)

    assert index.get("loop") == str(root / "real" / "loop")
    assert index.get("inside.txt") == str(root / "real" / "inside.txt")
    assert len(index) == 3


def test_non_ascii_names_are_kept_verbatim(make_tree) -> None:
    root = make_tree("фото/été.png", "日本語.txt")

    index = build_index(str(root), None)

    assert index.get("été.png") == str(root / "фото" / "été.png")
    assert "日本語.txt" in index


def _remove_deep_chain(top: Path, depth: int) -> None:
    # shutil.rmtree may recurse once per level, so unwind by hand.
    chain = [top]
    for _ in range(depth - 1):
        chain.append(chain[-1] / "d")
    for directory in reversed(chain):
        for child in directory.iterdir():
            if not child.is_dir():
                child.unlink()
        directory.rmdir()


def test_very_deep_tree_is_walked_without_recursion_limit(make_tree) -> None:
    root = make_tree()
    current = root
    created = 0
    try:
        for _ in range(1100):
            (current / "d").mkdir()
            current = current / "d"
            created += 1
        (current / "leaf.txt").write_text("x", encoding="utf-8")
    except OSError:
        if created:
            _remove_deep_chain(root / "d", created)
        pytest.skip("path too long for this filesystem")

    try:
        index = build_index(str(root), None)

        assert index.get("leaf.txt") == str(current / "leaf.txt")
        assert index.get("d") == str(current)
        assert len(index) == 2
    finally:
        _remove_deep_chain(root / "d", created)


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_symlink_to_directory_named_like_skip_directory_is_omitted(make_tree, tmp_path: Path) -> None:
    root = make_tree("docs/readme.md")
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    try:
        os.symlink(str(elsewhere), str(root / "Library"))
        os.symlink(str(root / "docs" / "readme.md"), str(root / "docs" / "Library"))
    except OSError:
        pytest.skip("cannot create symlinks here")

    index = build_index(str(root), "Library")

    # The link to a file keeps its entry, the link to a directory does not.
    assert index.get("Library") == str(root / "docs" / "Library")
    assert "readme.md" in index
