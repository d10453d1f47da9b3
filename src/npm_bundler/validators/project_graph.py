"""CLI entrypoint for validating a workspace project graph file."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from npm_bundler.graph import SCHEMA_PATH, GraphError, read_graph_document, validate_graph_document


def validate_graph_file(input_path: Path, schema_path: Path = SCHEMA_PATH) -> None:
    document = read_graph_document(input_path)
    validate_graph_document(document, schema_path)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="Path to the project graph (JSON or YAML) to validate",
    )
    parser.add_argument(
        "--schema",
        type=Path,
        default=SCHEMA_PATH,
        help="Path to the JSON schema used for validation",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        validate_graph_file(args.input, args.schema)
    except GraphError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    print(f"Project graph {args.input} is valid against {args.schema}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
