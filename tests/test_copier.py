from __future__ import annotations

import os
import shutil
from pathlib import Path

import pytest

from npm_bundler.copier import CopyError, DirectoryCopier


def _snapshot(root: Path) -> dict[str, bytes | None]:
    """Map relative paths to file bytes (None for directories)."""
    return {
        path.relative_to(root).as_posix(): (path.read_bytes() if path.is_file() else None)
        for path in sorted(root.rglob("*"))
    }


def test_copy_tree_reproduces_nested_structure(tmp_path: Path, diagnostics) -> None:
    source = tmp_path / "dist" / "util"
    (source / "lib" / "deep" / "deeper").mkdir(parents=True)
    (source / "empty").mkdir()
    (source / "index.js").write_text("module.exports = 1;\n", encoding="utf-8")
    (source / "lib" / "a.js").write_text("a", encoding="utf-8")
    (source / "lib" / "deep" / "deeper" / "b.bin").write_bytes(bytes(range(256)))

    dest = tmp_path / "out" / "node_modules" / "@acme" / "util"
    DirectoryCopier(diagnostics).copy_tree(source, dest)

    assert _snapshot(dest) == _snapshot(source)
    assert diagnostics.messages == []


def test_copy_tree_creates_missing_destination_ancestors(tmp_path: Path, diagnostics) -> None:
    source = tmp_path / "src"
    source.mkdir()
    (source / "file.txt").write_text("x", encoding="utf-8")

    dest = tmp_path / "a" / "b" / "c"
    DirectoryCopier(diagnostics).copy_tree(source, dest)

    assert (dest / "file.txt").read_text(encoding="utf-8") == "x"


def test_copy_tree_overwrites_existing_files(tmp_path: Path, diagnostics) -> None:
    source = tmp_path / "src"
    source.mkdir()
    (source / "index.js").write_text("new", encoding="utf-8")
    dest = tmp_path / "dest"
    dest.mkdir()
    (dest / "index.js").write_text("old", encoding="utf-8")
    (dest / "extra.js").write_text("kept", encoding="utf-8")

    DirectoryCopier(diagnostics).copy_tree(source, dest)

    assert (dest / "index.js").read_text(encoding="utf-8") == "new"
    assert (dest / "extra.js").read_text(encoding="utf-8") == "kept"


def test_file_copy_failure_aborts_remaining_entries(
    tmp_path: Path, diagnostics, monkeypatch: pytest.MonkeyPatch
) -> None:
    source = tmp_path / "src"
    source.mkdir()
    for name in ("a.js", "b.js", "c.js"):
        (source / name).write_text(name, encoding="utf-8")
    dest = tmp_path / "dest"

    real_copyfile = shutil.copyfile

    def failing_copyfile(src, dst, *args, **kwargs):
        if Path(src).name == "b.js":
            raise PermissionError("denied")
        return real_copyfile(src, dst, *args, **kwargs)

    monkeypatch.setattr("npm_bundler.copier.shutil.copyfile", failing_copyfile)

    with pytest.raises(CopyError, match="Could not copy"):
        DirectoryCopier(diagnostics).copy_tree(source, dest)

    assert (dest / "a.js").exists()
    assert not (dest / "c.js").exists()
    assert diagnostics.of("error") == [f"Could not copy {source / 'b.js'} to {dest / 'b.js'}"]


def test_missing_source_directory_raises(tmp_path: Path, diagnostics) -> None:
    with pytest.raises(CopyError, match="Could not read directory"):
        DirectoryCopier(diagnostics).copy_tree(tmp_path / "missing", tmp_path / "dest")
    assert len(diagnostics.of("error")) == 1


def test_destination_blocked_by_file_raises(tmp_path: Path, diagnostics) -> None:
    source = tmp_path / "src"
    source.mkdir()
    blocker = tmp_path / "dest"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(CopyError, match="Could not create directory"):
        DirectoryCopier(diagnostics).copy_tree(source, blocker)


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_symlinks_are_skipped_with_warning(tmp_path: Path, diagnostics) -> None:
    source = tmp_path / "src"
    (source / "real").mkdir(parents=True)
    (source / "real" / "file.txt").write_text("x", encoding="utf-8")
    try:
        os.symlink(source / "real" / "file.txt", source / "file-link.txt")
        os.symlink(source / "real", source / "dir-link", target_is_directory=True)
    except OSError:
        pytest.skip("cannot create symlinks here")

    dest = tmp_path / "dest"
    DirectoryCopier(diagnostics).copy_tree(source, dest)

    assert (dest / "real" / "file.txt").exists()
    assert not (dest / "file-link.txt").exists()
    assert not (dest / "dir-link").exists()
    assert len(diagnostics.of("warn")) == 2
