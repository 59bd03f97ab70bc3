"""Loader for the line-oriented requirements list (``name[,constraint]``)."""

from __future__ import annotations

from pathlib import Path

import structlog

from pkgaudit.loaders.base import read_text
from pkgaudit.models import Requirement

log = structlog.get_logger("pkgaudit.loader")


def parse_requirements(content: str) -> list[Requirement]:
    """Parse requirement lines, skipping blanks and ``#`` comments.

    Each remaining line is split on its first comma. Lines are never
    rejected: a line without a usable name still yields a requirement,
    which will simply not be found.
    """
    requirements: list[Requirement] = []
    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        name, sep, constraint = line.partition(",")
        constraint = constraint.strip()
        requirements.append(
            Requirement(
                name=name.strip(),
                version_constraint=constraint if sep and constraint else None,
            )
        )
    return requirements


def load_requirements(path: str | Path) -> list[Requirement]:
    requirements = parse_requirements(read_text(path))
    log.debug("loader.requirements_loaded", path=str(path), count=len(requirements))
    return requirements
