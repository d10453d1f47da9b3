"""Recursive directory copy used to populate node_modules."""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from .diagnostics import Diagnostics, LoggerDiagnostics


class CopyError(RuntimeError):
    """Raised when a file or directory cannot be copied."""


class DirectoryCopier:
    """Copy a directory tree, aborting on the first failure.

    Regular files are copied byte for byte (permission bits are not
    preserved). Symbolic links and special files are skipped with a warning;
    directory links are never followed.
    """

    def __init__(self, diagnostics: Diagnostics | None = None) -> None:
        self.diagnostics = diagnostics or LoggerDiagnostics()

    def copy_tree(self, source_dir: Path, dest_dir: Path) -> None:
        stack: list[tuple[Path, Path]] = [(Path(source_dir), Path(dest_dir))]
        while stack:
            source, dest = stack.pop()
            self._ensure_dir(dest)
            subdirs: list[tuple[Path, Path]] = []
            for entry in self._list(source):
                entry_source = source / entry.name
                entry_dest = dest / entry.name
                if entry.is_file(follow_symlinks=False):
                    self._copy_file(entry_source, entry_dest)
                elif entry.is_dir(follow_symlinks=False):
                    subdirs.append((entry_source, entry_dest))
                else:
                    self.diagnostics.warn(f"Skipping {entry_source}: not a regular file or directory")
            # Reversed so directories are visited in name order.
            stack.extend(reversed(subdirs))

    def _ensure_dir(self, dest: Path) -> None:
        try:
            dest.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            self.diagnostics.error(f"Could not create directory {dest}")
            raise CopyError(f"Could not create directory {dest}: {exc}") from exc

    def _list(self, source: Path) -> list[os.DirEntry[str]]:
        try:
            with os.scandir(source) as entries:
                return sorted(entries, key=lambda entry: entry.name)
        except OSError as exc:
            self.diagnostics.error(f"Could not read directory {source}")
            raise CopyError(f"Could not read directory {source}: {exc}") from exc

    def _copy_file(self, source: Path, dest: Path) -> None:
        try:
            shutil.copyfile(source, dest)
        except OSError as exc:
            self.diagnostics.error(f"Could not copy {source} to {dest}")
            raise CopyError(f"Could not copy {source} to {dest}: {exc}") from exc

