"""Check each requirement against the manifest and (optionally) the lockfile."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

import structlog

from pkgaudit import semver
from pkgaudit.models import FoundVersion, ReconciliationResult, Requirement, Status

log = structlog.get_logger("pkgaudit.reconciler")


def locate(
    name: str,
    manifest: Mapping[str, str],
    lock: Mapping[str, str] | None = None,
) -> FoundVersion | None:
    """Find a package's version, preferring the lockfile's resolved version."""
    if lock is not None and name in lock:
        return FoundVersion(version=lock[name], source="lockfile")
    if name in manifest:
        return FoundVersion(version=manifest[name], source="manifest")
    return None


def version_matches(found_version: str, constraint: str) -> bool:
    """Conservative check: the *lowest* version ``found_version`` admits must
    satisfy ``constraint``.

    A manifest range such as ``^2.1.0`` is reduced to ``2.1.0`` before
    testing, so a range is only accepted when even its minimum fits. A
    version that cannot be reduced (``latest``, ``file:...``, git URLs)
    never matches.
    """
    minimum = semver.min_version(found_version)
    if minimum is None:
        log.debug("reconcile.unresolvable_version", version=found_version)
        return False
    return semver.satisfies(str(minimum), constraint)


def reconcile_one(
    requirement: Requirement,
    manifest: Mapping[str, str],
    lock: Mapping[str, str] | None = None,
) -> ReconciliationResult:
    found = locate(requirement.name, manifest, lock)
    constraint = requirement.version_constraint

    if found is None:
        return ReconciliationResult(
            name=requirement.name, status=Status.MISSING, expected=constraint
        )

    if constraint is None or version_matches(found.version, constraint):
        status = Status.FOUND
    else:
        status = Status.MISMATCH
        log.info(
            "reconcile.mismatch",
            package=requirement.name,
            expected=constraint,
            found=found.version,
            source=found.source,
        )

    return ReconciliationResult(
        name=requirement.name,
        status=status,
        expected=constraint,
        found_version=found.version,
        source=found.source,
    )


def reconcile(
    requirements: Sequence[Requirement],
    manifest: Mapping[str, str],
    lock: Mapping[str, str] | None = None,
) -> list[ReconciliationResult]:
    """One result per requirement, in input order."""
    return [reconcile_one(req, manifest, lock) for req in requirements]
