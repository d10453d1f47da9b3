"""Workspace project graph.

Loads the graph written by ``nx graph --file=<path>`` (or an equivalent
JSON/YAML document), answers which dependencies of a project have no build
target of their own, and resolves target output directories.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

import yaml
from jsonschema import Draft202012Validator, ValidationError

from .models.build_task import BuildTask

SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "project-graph.schema.json"

_TOKEN = re.compile(r"\{([^{}]+)\}")
_WORKSPACE_ROOT_PREFIX = "{workspaceRoot}/"


class GraphError(RuntimeError):
    """Raised when the graph cannot be loaded or does not describe a project."""


class BuildGraphService(Protocol):
    """Structural protocol for the build graph lookups the bundler needs."""

    def non_buildable_dependencies(
        self, project: str, target: str, configuration: str | None = None
    ) -> list[str]: ...

    def outputs_for(self, task: BuildTask, project: str) -> list[str]: ...


@dataclass(slots=True, frozen=True)
class TargetConfig:
    """A single target (``build``, ``test``...) declared by a project."""

    executor: str | None = None
    outputs: tuple[str, ...] | None = None
    options: Mapping[str, Any] = field(default_factory=dict)
    configurations: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)

    def options_for(self, configuration: str | None) -> dict[str, Any]:
        merged = dict(self.options)
        if configuration:
            merged.update(self.configurations.get(configuration) or {})
        return merged

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TargetConfig:
        outputs = data.get("outputs")
        return cls(
            executor=data.get("executor"),
            outputs=tuple(outputs) if outputs is not None else None,
            options=dict(data.get("options") or {}),
            configurations={k: dict(v or {}) for k, v in (data.get("configurations") or {}).items()},
        )


@dataclass(slots=True, frozen=True)
class ProjectNode:
    """An internal workspace project."""

    name: str
    type: str
    root: str
    targets: Mapping[str, TargetConfig] = field(default_factory=dict)

    def is_buildable(self, target: str) -> bool:
        config = self.targets.get(target)
        # A missing executor still counts; only an explicit empty one opts out.
        return config is not None and config.executor != ""

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> ProjectNode:
        payload = data.get("data") or {}
        targets = payload.get("targets") or {}
        return cls(
            name=data.get("name", name),
            type=data.get("type", "lib"),
            root=payload.get("root", ""),
            targets={key: TargetConfig.from_dict(value or {}) for key, value in targets.items()},
        )


@dataclass(slots=True)
class ProjectGraph:
    """In-memory project graph implementing :class:`BuildGraphService`."""

    nodes: dict[str, ProjectNode]
    dependencies: dict[str, list[str]]

    def node(self, project: str) -> ProjectNode:
        node = self.nodes.get(project)
        if node is None:
            raise GraphError(f"Unknown project '{project}'")
        return node

    def non_buildable_dependencies(
        self, project: str, target: str, configuration: str | None = None
    ) -> list[str]:
        """Return internal dependencies of ``project`` lacking a ``target`` target.

        Dependencies are collected transitively, depth first, in the order
        the graph lists them. ``configuration`` does not change buildability.
        """
        self.node(project)
        return [
            name
            for name in self._collect_dependencies(project)
            if not self.nodes[name].is_buildable(target)
        ]

    def _collect_dependencies(self, project: str) -> list[str]:
        seen: set[str] = {project}
        ordered: list[str] = []
        stack: list[str] = list(reversed(self.dependencies.get(project, [])))
        while stack:
            name = stack.pop()
            if name in seen or name not in self.nodes:
                continue
            seen.add(name)
            ordered.append(name)
            stack.extend(reversed(self.dependencies.get(name, [])))
        return ordered

    def outputs_for(self, task: BuildTask, project: str) -> list[str]:
        """Return workspace-relative output paths of ``task.target`` on ``project``.

        The task's project is only informational; the outputs are those of
        ``project``'s target, with ``task.configuration`` applied to options.
        """
        node = self.node(project)
        # Projects without the target fall back to the default output location.
        target = node.targets.get(task.target) or TargetConfig()

        options = target.options_for(task.configuration)
        if target.outputs is None:
            output_path = options.get("outputPath")
            if isinstance(output_path, str) and output_path:
                return [output_path]
            return [f"dist/{node.root}" if node.root else f"dist/{node.name}"]

        context = {
            "projectRoot": node.root,
            "projectName": node.name,
            "options": options,
        }
        outputs: list[str] = []
        for template in target.outputs:
            resolved = _interpolate(template, context)
            if resolved is not None:
                outputs.append(resolved)
        return outputs


def _lookup(context: Mapping[str, Any], dotted: str) -> Any:
    value: Any = context
    for part in dotted.split("."):
        if not isinstance(value, Mapping) or part not in value:
            return None
        value = value[part]
    return value


def _interpolate(template: str, context: Mapping[str, Any]) -> str | None:
    if template.startswith(_WORKSPACE_ROOT_PREFIX):
        template = template[len(_WORKSPACE_ROOT_PREFIX) :]
    missing = False

    def replace(match: re.Match[str]) -> str:
        nonlocal missing
        value = _lookup(context, match.group(1))
        if value is None or isinstance(value, (Mapping, list)):
            missing = True
            return ""
        return str(value)

    resolved = _TOKEN.sub(replace, template)
    return None if missing else resolved


def _load_schema(path: Path = SCHEMA_PATH) -> dict[str, Any]:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise GraphError(f"Failed to load graph schema {path}: {exc}") from exc


def _describe(error: ValidationError) -> str:
    return f"  {error.json_path}: {error.message}"


def validate_graph_document(document: Any, schema_path: Path = SCHEMA_PATH) -> None:
    """Validate a graph document against the JSON schema.

    Raises:
        GraphError: If the schema cannot be loaded or the document does not
            conform.
    """
    validator = Draft202012Validator(_load_schema(schema_path))
    problems = sorted(_describe(error) for error in validator.iter_errors(document))
    if problems:
        raise GraphError("Project graph failed validation:\n" + "\n".join(problems))


def read_graph_document(path: Path) -> Any:
    """Read a JSON or YAML graph file and unwrap the ``nx graph`` envelope."""
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise GraphError(f"Failed to read project graph {path}: {exc}") from exc

    try:
        if path.suffix in {".yaml", ".yml"}:
            document = yaml.safe_load(content)
        else:
            document = json.loads(content)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise GraphError(f"Invalid project graph {path}: {exc}") from exc

    if isinstance(document, dict) and isinstance(document.get("graph"), dict):
        return document["graph"]
    return document


def graph_from_document(document: Mapping[str, Any]) -> ProjectGraph:
    nodes = {
        name: ProjectNode.from_dict(name, data)
        for name, data in (document.get("nodes") or {}).items()
    }
    dependencies: dict[str, list[str]] = {}
    for source, edges in (document.get("dependencies") or {}).items():
        dependencies[source] = [edge["target"] for edge in edges or []]
    return ProjectGraph(nodes=nodes, dependencies=dependencies)


def load_project_graph(path: Path | str) -> ProjectGraph:
    """Load, validate and build a :class:`ProjectGraph` from ``path``."""
    document = read_graph_document(Path(path))
    validate_graph_document(document)
    return graph_from_document(document)
