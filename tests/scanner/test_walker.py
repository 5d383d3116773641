import os
from pathlib import Path

import pytest

from enveil.core.walker import iter_files, protect_skip_dirs, walk_tree


@pytest.fixture
def tree(tmp_path: Path):
    for rel in [
        "a.txt",
        "src/b.py",
        "src/deep/c.env",
        ".git/config",
        ".hidden/d.txt",
        "node_modules/pkg/index.js",
        "target/debug/out",
        "enveil_secure/old.env",
    ]:
        p = tmp_path / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text("x")
    return tmp_path


def rel_names(root, paths):
    return sorted(str(p.relative_to(root)).replace(os.sep, "/") for p in paths)


def test_iter_files_visits_each_file_once(tree):
    assert rel_names(tree, iter_files(tree)) == [
        "a.txt",
        "enveil_secure/old.env",
        "src/b.py",
        "src/deep/c.env",
    ]


def test_walk_tree_invokes_callback(tree):
    seen = []
    walk_tree(tree, seen.append)
    assert rel_names(tree, seen) == rel_names(tree, iter_files(tree))


def test_protect_skip_dirs_exclude_quarantine(tree):
    skip = protect_skip_dirs(tree / "enveil_secure")
    assert "enveil_secure" in skip
    assert rel_names(tree, iter_files(tree, skip)) == ["a.txt", "src/b.py", "src/deep/c.env"]


def test_hidden_files_are_visited(tmp_path: Path):
    (tmp_path / ".env").write_text("x")
    assert rel_names(tmp_path, iter_files(tmp_path)) == [".env"]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_directory_symlink_cycle_not_followed(tmp_path: Path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "f.txt").write_text("x")
    try:
        os.symlink(tmp_path, tmp_path / "sub" / "loop", target_is_directory=True)
    except OSError:
        pytest.skip("cannot create symlink")
    assert rel_names(tmp_path, iter_files(tmp_path)) == ["sub/f.txt"]
