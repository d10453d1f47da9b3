"""Dependency descriptor model."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..validators import package_name as names


@dataclass(frozen=True)
class DependencyDescriptor:
    """A non-buildable dependency that may need bundling.

    ``package_name`` is None when the dependency's manifest could not be
    read; such descriptors are never bundled.
    """

    project_name: str
    package_name: str | None
    valid_package_name: bool
    is_scoped: bool
    dist_path: Path

    @classmethod
    def from_package_name(cls, project_name: str, package_name: str, dist_path: Path) -> DependencyDescriptor:
        return cls(
            project_name=project_name,
            package_name=package_name,
            valid_package_name=names.is_valid_package_name(package_name),
            is_scoped=names.is_scoped(package_name),
            dist_path=dist_path,
        )

    @classmethod
    def unreadable(cls, project_name: str, dist_path: Path) -> DependencyDescriptor:
        return cls(
            project_name=project_name,
            package_name=None,
            valid_package_name=False,
            is_scoped=False,
            dist_path=dist_path,
        )
