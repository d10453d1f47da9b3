"""Core bundling entrypoints.

This module MUST NOT contain CLI-specific logic so it can be driven by the
command line wrapper as well as by any other build orchestrator.
"""

from __future__ import annotations

from .diagnostics import Diagnostics, LoggerDiagnostics
from .graph import BuildGraphService
from .models import ExecutorContext
from .resolver import DependencyResolver
from .updater import BundleUpdater


def bundle_dependencies(
    context: ExecutorContext,
    graph: BuildGraphService,
    diagnostics: Diagnostics | None = None,
) -> bool:
    """Bundle the non-buildable dependencies of ``context.project_name``.

    Params:
        context: project, target and configuration of the current invocation
        graph: build graph used to find dependencies and output directories
        diagnostics: sink for progress and error messages; defaults to the
            ``npm_bundler`` logger

    Returns: True when every dependency was bundled (or already was), False
        when the target manifest is unreadable or a package name is invalid.

    Raises:
        CopyError: when copying a dependency's output fails; the invocation
            is aborted.
        GraphError: when the graph does not know the project or its outputs.
    """
    diagnostics = diagnostics or LoggerDiagnostics()
    task = context.build_task()

    dependency_names = graph.non_buildable_dependencies(
        context.project_name,
        context.target_name,
        context.configuration_name,
    )

    resolver = DependencyResolver(graph, context.root, task, diagnostics)
    dependencies = resolver.resolve_all(dependency_names)
    target_output_dir = resolver.output_dir(context.project_name)

    updater = BundleUpdater(diagnostics)
    return updater.update(target_output_dir, dependencies, project_name=context.project_name)
