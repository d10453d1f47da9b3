"""npm-bundler core package.

Copies the build output of non-buildable workspace libraries into a
buildable library's ``node_modules`` and lists them under
``bundledDependencies``, so the packed library ships them.
"""

__all__ = [
    "core",
]
