#!/usr/bin/env python3
"""Local CLI entrypoint to bundle dependencies outside of the build orchestrator.

Usage:
  python scripts/bundle.py --project my-lib [--configuration production] [--graph graph.json]

This calls the same core bundle_dependencies used by the npm-bundler command.
"""

from __future__ import annotations

from npm_bundler.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
