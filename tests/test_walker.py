from __future__ import annotations

import os
from pathlib import Path

import pytest

from tools.keysweep import walker
from tools.keysweep.errors import InvalidConfigError, NotFoundError, SourceReadError
from tools.keysweep.walker import build_mask_pattern, parse_mask, walk


def test_walk_filters_by_extension_and_recurses(source_tree):
    files = walk(source_tree, build_mask_pattern())
    names = sorted(path.name for path in files)
    assert names == ["Header.tsx", "app.js"]
    assert all(path.is_absolute() for path in files)


def test_mask_is_a_case_sensitive_suffix_match():
    pattern = build_mask_pattern("js, .ts")
    assert pattern.search("index.js")
    assert pattern.search("types.d.ts")
    assert not pattern.search("index.JS")
    assert not pattern.search("index.json")
    assert not pattern.search("indexjs")


def test_malformed_masks_are_rejected():
    for mask in ("", "js,,ts", "j s", "src/js"):
        with pytest.raises(InvalidConfigError):
            parse_mask(mask)


def test_missing_root_raises_not_found(tmp_path: Path):
    with pytest.raises(NotFoundError):
        walk(tmp_path / "nope", build_mask_pattern())


def test_root_must_be_a_directory(tmp_path: Path):
    target = tmp_path / "file.js"
    target.write_text("", encoding="utf-8")
    with pytest.raises(NotFoundError):
        walk(target, build_mask_pattern())


def test_symlink_cycle_is_visited_once(source_tree):
    try:
        os.symlink(source_tree, source_tree / "components" / "loop", target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported")
    files = walk(source_tree, build_mask_pattern())
    assert sorted(path.name for path in files) == ["Header.tsx", "app.js"]


def test_symlinked_directory_can_be_skipped(tmp_path: Path):
    real = tmp_path / "real"
    real.mkdir()
    (real / "a.js").write_text("", encoding="utf-8")
    root = tmp_path / "root"
    root.mkdir()
    try:
        os.symlink(real, root / "linked", target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported")

    assert [path.name for path in walk(root, build_mask_pattern("js"))] == ["a.js"]
    assert walk(root, build_mask_pattern("js"), follow_symlinks=False) == []


def test_file_symlink_is_listed_once(tmp_path: Path):
    root = tmp_path / "src"
    root.mkdir()
    target = root / "a.js"
    target.write_text("I18n.t('welcome')", encoding="utf-8")
    try:
        os.symlink(target, root / "link.js")
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported")

    files = walk(root, build_mask_pattern("js"))
    assert files == [target.resolve()]


def test_unlistable_directory_fails_the_walk(source_tree, monkeypatch):
    real_scandir = os.scandir
    blocked = (source_tree / "components").resolve()

    def scandir(path):
        if Path(path) == blocked:
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(walker.os, "scandir", scandir)
    with pytest.raises(SourceReadError) as excinfo:
        walk(source_tree, build_mask_pattern())
    assert excinfo.value.path == blocked
    assert str(blocked) in str(excinfo.value)
