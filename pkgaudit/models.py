"""Data models for the audit pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

VersionSource = Literal["manifest", "lockfile"]


class Status(str, Enum):
    FOUND = "found"
    MISMATCH = "mismatch"
    MISSING = "missing"


@dataclass(frozen=True)
class Requirement:
    """One entry of the requirements list: a package name plus optional constraint."""

    name: str
    version_constraint: str | None = None


@dataclass(frozen=True)
class FoundVersion:
    version: str
    source: VersionSource


@dataclass(frozen=True)
class ReconciliationResult:
    """Outcome of checking a single requirement.

    ``expected`` is the requirement's constraint (``None`` when the
    requirement named no version). ``found_version`` and ``source`` are
    ``None`` for missing packages.
    """

    name: str
    status: Status
    expected: str | None = None
    found_version: str | None = None
    source: VersionSource | None = None


# Package name -> version string (a range for manifests, concrete for lockfiles).
DependencySet = dict[str, str]
