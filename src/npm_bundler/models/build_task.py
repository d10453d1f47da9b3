"""Task records passed between the orchestrator and the build graph."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

BUILD_TARGET = "build"


@dataclass(slots=True, frozen=True)
class BuildTask:
    """Identify a project target under a configuration.

    Only used to look up output paths; it carries no execution state.
    """

    project: str
    target: str = BUILD_TARGET
    configuration: str | None = None


@dataclass(slots=True, frozen=True)
class ExecutorContext:
    """Inputs supplied by the host orchestrator for one invocation."""

    root: Path
    project_name: str
    target_name: str = BUILD_TARGET
    configuration_name: str | None = None

    def build_task(self) -> BuildTask:
        """Return the synthetic build task for this invocation."""
        return BuildTask(
            project=self.project_name,
            target=BUILD_TARGET,
            configuration=self.configuration_name,
        )
