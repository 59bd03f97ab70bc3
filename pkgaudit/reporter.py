"""Group reconciliation results and render the human-readable report."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from pkgaudit.models import ReconciliationResult, Status

_SECTIONS = (
    (Status.FOUND, "Found packages"),
    (Status.MISMATCH, "Version mismatches"),
    (Status.MISSING, "Missing packages"),
)


def partition(
    results: Iterable[ReconciliationResult],
) -> dict[Status, list[ReconciliationResult]]:
    """Split results by status, keeping requirement order inside each group."""
    groups: dict[Status, list[ReconciliationResult]] = {status: [] for status in Status}
    for result in results:
        groups[result.status].append(result)
    return groups


def _describe(result: ReconciliationResult) -> str:
    if result.status is Status.FOUND:
        return f"{result.name} {result.found_version} ({result.source})"
    if result.status is Status.MISMATCH:
        return (
            f"{result.name}: expected {result.expected}, "
            f"found {result.found_version} ({result.source})"
        )
    if result.expected:
        return f"{result.name} (wanted {result.expected})"
    return result.name


def render_text(results: Sequence[ReconciliationResult]) -> str:
    groups = partition(results)
    lines: list[str] = []
    for status, title in _SECTIONS:
        items = groups[status]
        lines.append(f"{title} ({len(items)}):")
        if not items:
            lines.append("  None")
        for result in items:
            lines.append(f"  {_describe(result)}")
        lines.append("")
    return "\n".join(lines).rstrip("\n")


def has_failures(
    results: Iterable[ReconciliationResult], *, fail_on_mismatch: bool = False
) -> bool:
    """True when any requirement is missing (or mismatched, if opted in)."""
    failing = {Status.MISSING, Status.MISMATCH} if fail_on_mismatch else {Status.MISSING}
    return any(result.status in failing for result in results)


def exit_code(
    results: Iterable[ReconciliationResult], *, fail_on_mismatch: bool = False
) -> int:
    return 1 if has_failures(results, fail_on_mismatch=fail_on_mismatch) else 0
