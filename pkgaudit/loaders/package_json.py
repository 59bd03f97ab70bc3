"""Loader for package.json manifests."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import structlog

from pkgaudit.loaders.base import read_json_object
from pkgaudit.models import DependencySet

log = structlog.get_logger("pkgaudit.loader")

# Increasing precedence: later groups overwrite earlier ones on name collision.
DEPENDENCY_GROUPS = (
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "optionalDependencies",
)


def merge_dependency_groups(sources: Iterable[Mapping[str, str]]) -> DependencySet:
    """Shallow-merge mappings in order; the last source wins on collision."""
    merged: DependencySet = {}
    for source in sources:
        merged.update(source)
    return merged


def _group(data: dict[str, Any], key: str, path: str) -> dict[str, str]:
    group = data.get(key)
    if group is None:
        return {}
    if not isinstance(group, dict):
        log.warning(
            "loader.group_ignored",
            path=path,
            group=key,
            reason=f"expected an object, got {type(group).__name__}",
        )
        return {}
    return {name: str(version) for name, version in group.items()}


def parse_manifest(data: dict[str, Any], path: str = "package.json") -> DependencySet:
    return merge_dependency_groups(_group(data, key, path) for key in DEPENDENCY_GROUPS)


def load_manifest(path: str | Path) -> DependencySet:
    manifest = parse_manifest(read_json_object(path), str(path))
    log.debug("loader.manifest_loaded", path=str(path), count=len(manifest))
    return manifest
