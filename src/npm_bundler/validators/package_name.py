"""npm package name validation.

Follows the rules npm applies when publishing: names that produce errors were
never valid, names that only produce warnings were accepted in the past but
cannot be used for new packages.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import quote

MAX_NAME_LENGTH = 214

_BLACKLIST = ("node_modules", "favicon.ico")

# Node.js core module names; these used to be publishable.
CORE_MODULES = frozenset(
    {
        "_http_agent",
        "_http_client",
        "_http_common",
        "_http_incoming",
        "_http_outgoing",
        "_http_server",
        "_stream_duplex",
        "_stream_passthrough",
        "_stream_readable",
        "_stream_transform",
        "_stream_wrap",
        "_stream_writable",
        "_tls_common",
        "_tls_wrap",
        "assert",
        "async_hooks",
        "buffer",
        "child_process",
        "cluster",
        "console",
        "constants",
        "crypto",
        "dgram",
        "diagnostics_channel",
        "dns",
        "domain",
        "events",
        "freelist",
        "fs",
        "http",
        "http2",
        "https",
        "inspector",
        "module",
        "net",
        "os",
        "path",
        "perf_hooks",
        "process",
        "punycode",
        "querystring",
        "readline",
        "repl",
        "smalloc",
        "stream",
        "string_decoder",
        "sys",
        "timers",
        "tls",
        "trace_events",
        "tty",
        "url",
        "util",
        "v8",
        "vm",
        "wasi",
        "worker_threads",
        "zlib",
    }
)

_SCOPED_PACKAGE_PATTERN = re.compile(r"(?:@([^/]+?)/)?([^/]+?)")
_SCOPED_NAME_PATTERN = re.compile(r"@[a-z\d][\w\-.]+/[a-z\d][\w\-.]*", re.IGNORECASE | re.ASCII)
_SPECIAL_CHARACTERS = re.compile(r"[~'!()*]")


@dataclass(slots=True, frozen=True)
class NameValidation:
    """Outcome of validating a package name."""

    warnings: tuple[str, ...]
    errors: tuple[str, ...]

    @property
    def valid_for_new_packages(self) -> bool:
        return not self.errors and not self.warnings

    @property
    def valid_for_old_packages(self) -> bool:
        return not self.errors


def _encode_uri_component(value: str) -> str:
    return quote(value, safe="!~*'()")


def _is_url_friendly(name: str) -> bool:
    if _encode_uri_component(name) == name:
        return True
    # Scoped names (@user/package) are fine as long as each half is.
    match = _SCOPED_PACKAGE_PATTERN.fullmatch(name)
    if match is None or match.group(1) is None:
        return False
    user, package = match.group(1), match.group(2)
    return _encode_uri_component(user) == user and _encode_uri_component(package) == package


def validate(name: object) -> NameValidation:
    """Validate ``name`` against npm's package naming rules."""
    if name is None:
        return NameValidation(warnings=(), errors=("name cannot be null",))
    if not isinstance(name, str):
        return NameValidation(warnings=(), errors=("name must be a string",))

    warnings: list[str] = []
    errors: list[str] = []

    if not name:
        errors.append("name length must be greater than zero")
    if name.startswith("."):
        errors.append("name cannot start with a period")
    if name.startswith("_"):
        errors.append("name cannot start with an underscore")
    if name.strip() != name:
        errors.append("name cannot contain leading or trailing spaces")

    lowered = name.lower()
    for blacklisted in _BLACKLIST:
        if lowered == blacklisted:
            errors.append(f"{blacklisted} is a blacklisted name")

    if lowered in CORE_MODULES:
        warnings.append(f"{lowered} is a core module name")
    if len(name) > MAX_NAME_LENGTH:
        warnings.append(f"name can no longer contain more than {MAX_NAME_LENGTH} characters")
    if lowered != name:
        warnings.append("name can no longer contain capital letters")
    if _SPECIAL_CHARACTERS.search(name.split("/")[-1]):
        warnings.append("name can no longer contain special characters (\"~'!()*\")")

    if not _is_url_friendly(name):
        errors.append("name can only contain URL-friendly characters")

    return NameValidation(warnings=tuple(warnings), errors=tuple(errors))


def is_valid_package_name(name: object) -> bool:
    """Return True if ``name`` can be used to publish a new package."""
    return validate(name).valid_for_new_packages


def is_scoped(name: str | None) -> bool:
    """Return True for scoped names such as ``@foo/bar``."""
    if not isinstance(name, str):
        return False
    return _SCOPED_NAME_PATTERN.fullmatch(name) is not None
