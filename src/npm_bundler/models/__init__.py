"""Data models for dependency bundling."""

from __future__ import annotations

from .build_task import BuildTask, ExecutorContext
from .dependency import DependencyDescriptor

__all__ = [
    "BuildTask",
    "DependencyDescriptor",
    "ExecutorContext",
]
