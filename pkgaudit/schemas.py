"""JSON report schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from pkgaudit.models import ReconciliationResult, Status
from pkgaudit.reporter import has_failures, partition


class ResultItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    status: Status
    expected: str | None = None
    found_version: str | None = None
    source: str | None = None


class AuditReport(BaseModel):
    ok: bool
    found: list[ResultItem]
    mismatch: list[ResultItem]
    missing: list[ResultItem]

    @classmethod
    def from_results(
        cls, results: list[ReconciliationResult], *, fail_on_mismatch: bool = False
    ) -> AuditReport:
        groups = partition(results)
        return cls(
            ok=not has_failures(results, fail_on_mismatch=fail_on_mismatch),
            found=[ResultItem.model_validate(r) for r in groups[Status.FOUND]],
            mismatch=[ResultItem.model_validate(r) for r in groups[Status.MISMATCH]],
            missing=[ResultItem.model_validate(r) for r in groups[Status.MISSING]],
        )
