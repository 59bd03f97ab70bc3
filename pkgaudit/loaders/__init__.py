"""Input loaders: requirements list, package.json manifest, package-lock.json."""

from pkgaudit.loaders.package_json import load_manifest, merge_dependency_groups
from pkgaudit.loaders.package_lock import load_lockfile
from pkgaudit.loaders.requirements_list import load_requirements

__all__ = [
    "load_lockfile",
    "load_manifest",
    "load_requirements",
    "merge_dependency_groups",
]
