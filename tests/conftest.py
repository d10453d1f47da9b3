from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest


class RecordingDiagnostics:
    """Diagnostics sink that keeps every message for assertions."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def warn(self, message: str) -> None:
        self.messages.append(("warn", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def of(self, level: str) -> list[str]:
        return [message for lvl, message in self.messages if lvl == level]


@pytest.fixture
def diagnostics() -> RecordingDiagnostics:
    return RecordingDiagnostics()


def write_json(path: Path, payload: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    return path


def make_package(directory: Path, name: str | None, files: dict[str, str] | None = None) -> Path:
    """Create a built package directory with a package.json and extra files."""
    manifest: dict[str, Any] = {} if name is None else {"name": name, "version": "1.0.0"}
    write_json(directory / "package.json", manifest)
    for relative, content in (files or {}).items():
        target = directory / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return directory
