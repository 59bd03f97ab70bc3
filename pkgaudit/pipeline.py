"""Pipeline driver: load inputs -> reconcile -> report."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import structlog

from pkgaudit.exceptions import AuditError
from pkgaudit.loaders import load_lockfile, load_manifest, load_requirements
from pkgaudit.models import DependencySet, ReconciliationResult, Requirement
from pkgaudit.reconciler import reconcile

log = structlog.get_logger("pkgaudit.pipeline")


@dataclass
class LoadedInputs:
    requirements: list[Requirement]
    manifest: DependencySet
    lock: DependencySet | None = None


@dataclass
class LoadResult:
    """Either the parsed inputs or the error that stopped loading."""

    inputs: LoadedInputs | None = None
    error: AuditError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class AuditRun:
    load: LoadResult
    results: list[ReconciliationResult] = field(default_factory=list)


def load_inputs(
    requirements_path: str | Path,
    manifest_path: str | Path,
    lockfile_path: str | Path | None = None,
) -> LoadResult:
    """Read all inputs; the first failure is returned instead of raised."""
    try:
        inputs = LoadedInputs(
            requirements=load_requirements(requirements_path),
            manifest=load_manifest(manifest_path),
            lock=load_lockfile(lockfile_path) if lockfile_path is not None else None,
        )
    except AuditError as exc:
        log.debug("pipeline.load_failed", error=str(exc))
        return LoadResult(error=exc)
    return LoadResult(inputs=inputs)


def run_audit(
    requirements_path: str | Path,
    manifest_path: str | Path,
    lockfile_path: str | Path | None = None,
) -> AuditRun:
    loaded = load_inputs(requirements_path, manifest_path, lockfile_path)
    if loaded.inputs is None:
        return AuditRun(load=loaded)

    inputs = loaded.inputs
    results = reconcile(inputs.requirements, inputs.manifest, inputs.lock)
    log.info(
        "pipeline.reconciled",
        requirements=len(inputs.requirements),
        lockfile=lockfile_path is not None,
    )
    return AuditRun(load=loaded, results=results)
