"""Diagnostics sink used by the bundling core.

The core reports progress and problems through this small interface instead
of writing to process-wide logging, so callers (and tests) decide where the
messages end up.
"""

from __future__ import annotations

import logging
from typing import Protocol


class Diagnostics(Protocol):
    """Structural protocol for info/warn/error reporting."""

    def info(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class LoggerDiagnostics:
    """Forward diagnostics to a standard library logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("npm_bundler")

    def info(self, message: str) -> None:
        self.logger.info(message)

    def warn(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.logger.error(message)
