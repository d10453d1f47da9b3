"""Map non-buildable dependencies to bundling descriptors."""

from __future__ import annotations

from pathlib import Path

from .diagnostics import Diagnostics, LoggerDiagnostics
from .graph import BuildGraphService, GraphError
from .models import BuildTask, DependencyDescriptor
from .parsers.package_json import MANIFEST_NAME, ManifestError, read_package_name


class DependencyResolver:
    """Resolve dependency output directories and read their package names.

    Output paths are always derived from the invoking task, so every
    dependency is looked up under the outer configuration.
    """

    def __init__(
        self,
        graph: BuildGraphService,
        workspace_root: Path,
        task: BuildTask,
        diagnostics: Diagnostics | None = None,
    ) -> None:
        self.graph = graph
        self.workspace_root = Path(workspace_root)
        self.task = task
        self.diagnostics = diagnostics or LoggerDiagnostics()

    def output_dir(self, project_name: str) -> Path:
        outputs = self.graph.outputs_for(self.task, project_name)
        if not outputs:
            raise GraphError(f"Project '{project_name}' declares no outputs for '{self.task.target}'")
        return self.workspace_root / outputs[0]

    def resolve(self, project_name: str) -> DependencyDescriptor:
        dist_path = self.output_dir(project_name)
        try:
            package_name = read_package_name(dist_path / MANIFEST_NAME)
        except ManifestError:
            self.diagnostics.error(f"Error reading package.json from {project_name}")
            return DependencyDescriptor.unreadable(project_name, dist_path)
        return DependencyDescriptor.from_package_name(project_name, package_name, dist_path)

    def resolve_all(self, project_names: list[str]) -> list[DependencyDescriptor]:
        return [self.resolve(name) for name in project_names]
