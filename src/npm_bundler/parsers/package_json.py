"""Read and write package.json manifests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

MANIFEST_NAME = "package.json"


class ManifestError(RuntimeError):
    """Raised when a manifest is missing or cannot be parsed."""


def read_manifest(path: Path) -> dict[str, Any]:
    """Return the manifest at ``path`` as a dict.

    Raises:
        ManifestError: If the file is missing, unreadable, not JSON, or not a
            JSON object.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestError(f"Failed to read manifest {path}: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Invalid JSON in manifest {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ManifestError(f"Manifest {path} must be a JSON object")
    return data


def write_manifest(path: Path, payload: dict[str, Any]) -> None:
    """Write ``payload`` to ``path`` with two-space indentation."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def read_package_name(path: Path) -> str:
    """Return the declared ``name`` of the manifest at ``path``."""
    data = read_manifest(path)
    name = data.get("name")
    if not isinstance(name, str):
        raise ManifestError(f"Manifest {path} is missing a 'name' field")
    return name
