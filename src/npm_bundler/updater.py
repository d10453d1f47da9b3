"""Record bundled dependencies in a target manifest and copy them in place."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .copier import DirectoryCopier
from .diagnostics import Diagnostics, LoggerDiagnostics
from .models import DependencyDescriptor
from .parsers.package_json import MANIFEST_NAME, ManifestError, read_manifest, write_manifest

BUNDLED_DEPENDENCIES = "bundledDependencies"
NODE_MODULES = "node_modules"


class BundleUpdater:
    """Merge dependency descriptors into ``<output>/package.json``.

    Invalid package names are reported and fail the run without stopping the
    remaining dependencies. A :class:`~npm_bundler.copier.CopyError` raised
    while copying is not caught here.
    """

    def __init__(
        self,
        diagnostics: Diagnostics | None = None,
        copier: DirectoryCopier | None = None,
    ) -> None:
        self.diagnostics = diagnostics or LoggerDiagnostics()
        self.copier = copier or DirectoryCopier(self.diagnostics)

    def update(
        self,
        target_output_dir: Path,
        dependencies: Iterable[DependencyDescriptor],
        project_name: str | None = None,
    ) -> bool:
        target_output_dir = Path(target_output_dir)
        manifest_path = target_output_dir / MANIFEST_NAME
        node_modules = target_output_dir / NODE_MODULES
        label = project_name or str(target_output_dir)

        try:
            manifest = self._read(manifest_path)
        except ManifestError:
            self.diagnostics.error(f"Error reading package.json from {label}")
            return False

        bundled: list[str] = manifest.get(BUNDLED_DEPENDENCIES) or []
        manifest[BUNDLED_DEPENDENCIES] = bundled
        success = True
        dirty = False

        # Dependencies whose manifest failed to load were already reported.
        for dependency in (dep for dep in dependencies if dep.package_name):
            package_name = dependency.package_name
            destination = node_modules / package_name
            if not dependency.valid_package_name:
                self.diagnostics.error(
                    f"Processing {dependency.project_name}: the package name {package_name} "
                    f"associated with {dependency.project_name} is not valid. Make sure to use "
                    "the --import-path modifier when creating buildable libraries"
                )
                success = False
            elif package_name not in bundled:
                bundled.append(package_name)
                dirty = True
                self.diagnostics.info(f"Processing {dependency.project_name}")
                self.copier.copy_tree(dependency.dist_path, destination)
            elif not destination.is_dir():
                self.diagnostics.warn(
                    f"Processing {dependency.project_name}: the package name {package_name} "
                    "was already declared in your bundledDependencies but was not found in the "
                    "node_modules"
                )

        if dirty:
            write_manifest(manifest_path, manifest)
        return success

    @staticmethod
    def _read(path: Path) -> dict[str, Any]:
        manifest = read_manifest(path)
        bundled = manifest.get(BUNDLED_DEPENDENCIES)
        if bundled is not None and (
            not isinstance(bundled, list) or not all(isinstance(name, str) for name in bundled)
        ):
            raise ManifestError(f"'{BUNDLED_DEPENDENCIES}' in {path} must be a list of strings")
        return manifest
