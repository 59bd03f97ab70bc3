"""pkgaudit: check a package list against a package.json manifest and lockfile."""

__version__ = "0.1.0"

from pkgaudit.exceptions import AuditError, InputParseError, InputReadError
from pkgaudit.loaders import load_lockfile, load_manifest, load_requirements
from pkgaudit.models import FoundVersion, ReconciliationResult, Requirement, Status
from pkgaudit.pipeline import LoadResult, load_inputs, run_audit
from pkgaudit.reconciler import reconcile

__all__ = [
    "AuditError",
    "FoundVersion",
    "InputParseError",
    "InputReadError",
    "LoadResult",
    "ReconciliationResult",
    "Requirement",
    "Status",
    "load_inputs",
    "load_lockfile",
    "load_manifest",
    "load_requirements",
    "reconcile",
    "run_audit",
]
