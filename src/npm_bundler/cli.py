"""Command line entrypoint to bundle a project's non-buildable dependencies.

Usage:
  npm-bundler --project my-lib [--configuration production] [--root .] [--graph path]

Exit codes: 0 on success, 1 when bundling failed, 2 when the workspace or
project graph could not be loaded.
"""

from __future__ import annotations

import argparse
import logging
import sys

from .config import ConfigError, load_settings
from .copier import CopyError
from .core import bundle_dependencies
from .graph import GraphError, load_project_graph
from .models import ExecutorContext
from .models.build_task import BUILD_TARGET

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Bundle non-buildable dependencies into a build output.")
    parser.add_argument("--project", required=True, help="Project whose build output is updated")
    parser.add_argument("--target", default=BUILD_TARGET, help="Target used to decide buildability")
    parser.add_argument("--configuration", default=None, help="Build configuration name")
    parser.add_argument("--root", default=None, help="Workspace root (default: cwd)")
    parser.add_argument("--graph", default=None, help="Project graph file (JSON or YAML)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format=LOG_FORMAT)

    try:
        settings = load_settings(args.root, args.graph)
        graph = load_project_graph(settings.graph_path)
    except (ConfigError, GraphError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    context = ExecutorContext(
        root=settings.workspace_root,
        project_name=args.project,
        target_name=args.target,
        configuration_name=args.configuration,
    )
    logging.getLogger(__name__).debug("Bundling dependencies of %s using %s", args.project, settings.graph_path)

    try:
        success = bundle_dependencies(context, graph)
    except GraphError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2
    except CopyError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    print(f"{args.project}: {'bundled dependencies up to date' if success else 'bundling failed'}")
    return 0 if success else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
