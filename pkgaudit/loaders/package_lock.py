"""Loader for package-lock.json (lockfileVersion 2/3 ``packages`` shape)."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import structlog

from pkgaudit.loaders.base import read_json_object
from pkgaudit.models import DependencySet

log = structlog.get_logger("pkgaudit.loader")

# "node_modules/<name>" or "node_modules/@scope/<name>", nothing nested below.
_DIRECT_ENTRY_RE = re.compile(r"^node_modules/((?:@[^/]+/)?[^/]+)$")


def direct_package_name(install_path: str) -> str | None:
    """Return the package name for a top-level install path, else ``None``."""
    m = _DIRECT_ENTRY_RE.match(install_path)
    return m.group(1) if m else None


def parse_lockfile(data: dict[str, Any], path: str = "package-lock.json") -> DependencySet:
    packages = data.get("packages")
    if packages is None:
        log.warning("loader.lockfile_without_packages", path=path)
        return {}
    if not isinstance(packages, dict):
        log.warning(
            "loader.group_ignored",
            path=path,
            group="packages",
            reason=f"expected an object, got {type(packages).__name__}",
        )
        return {}

    resolved: DependencySet = {}
    for install_path, entry in packages.items():
        name = direct_package_name(install_path)
        if name is None:
            continue
        if not isinstance(entry, dict) or not entry.get("version"):
            continue
        resolved[name] = str(entry["version"])
    return resolved


def load_lockfile(path: str | Path) -> DependencySet:
    lock = parse_lockfile(read_json_object(path), str(path))
    log.debug("loader.lockfile_loaded", path=str(path), count=len(lock))
    return lock
