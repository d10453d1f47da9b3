"""Settings resolution for bundler runs.

The workspace root and the project graph file are taken from explicit
arguments first, then from environment variables, then from defaults
(current directory and ``<root>/project-graph.json``).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ROOT_ENV_VAR = "NPM_BUNDLER_WORKSPACE_ROOT"
GRAPH_ENV_VAR = "NPM_BUNDLER_GRAPH"
DEFAULT_GRAPH_NAME = "project-graph.json"


class ConfigError(RuntimeError):
    """Raised when settings cannot be resolved."""


@dataclass(slots=True, frozen=True)
class Settings:
    """Resolved locations for one bundler run."""

    workspace_root: Path
    graph_path: Path


def _resolve_root(root: Path | str | None) -> Path:
    if root is not None:
        return Path(root).resolve()

    env_root = os.environ.get(ROOT_ENV_VAR)
    if env_root:
        return Path(env_root).resolve()

    return Path.cwd()


def _resolve_graph_path(workspace_root: Path, graph: Path | str | None) -> Path:
    """Resolve the graph file path.

    Priority:
    1. Explicit path argument
    2. NPM_BUNDLER_GRAPH environment variable
    3. project-graph.json in the workspace root

    Relative paths are taken relative to the workspace root.
    """
    if graph is None:
        graph = os.environ.get(GRAPH_ENV_VAR) or DEFAULT_GRAPH_NAME

    path = Path(graph)
    if not path.is_absolute():
        path = workspace_root / path
    return path


def load_settings(root: Path | str | None = None, graph: Path | str | None = None) -> Settings:
    """Resolve and check the workspace root and project graph path.

    Raises:
        ConfigError: If the workspace root is not a directory or the graph
            file does not exist.
    """
    workspace_root = _resolve_root(root)
    if not workspace_root.is_dir():
        raise ConfigError(f"Workspace root is not a directory: {workspace_root}")

    graph_path = _resolve_graph_path(workspace_root, graph)
    if not graph_path.is_file():
        raise ConfigError(f"Project graph file not found: {graph_path}")

    return Settings(workspace_root=workspace_root, graph_path=graph_path)
