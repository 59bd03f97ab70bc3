"""CLI entry point: pkgaudit.

Usage:
    pkgaudit packages.csv package.json                      # manifest only
    pkgaudit packages.csv package.json package-lock.json    # prefer locked versions
    pkgaudit packages.csv package.json --json               # machine-readable report
"""

from __future__ import annotations

import sys

import click

from pkgaudit.core.logging import setup_logging
from pkgaudit.pipeline import run_audit
from pkgaudit.reporter import exit_code, render_text
from pkgaudit.schemas import AuditReport


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("requirements", required=False)
@click.argument("manifest", required=False)
@click.argument("lockfile", required=False)
@click.option("--json", "as_json", is_flag=True, help="Output the report as JSON")
@click.option(
    "--fail-on-mismatch",
    is_flag=True,
    help="Also exit non-zero when a package is present at a mismatched version",
)
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
@click.pass_context
def main(
    ctx: click.Context,
    requirements: str | None,
    manifest: str | None,
    lockfile: str | None,
    as_json: bool,
    fail_on_mismatch: bool,
    verbose: bool,
) -> None:
    """Check that the packages listed in REQUIREMENTS are declared in MANIFEST.

    REQUIREMENTS holds one ``name[,version-constraint]`` per line. When
    LOCKFILE is given, its resolved versions take precedence over the
    manifest's ranges.
    """
    if requirements is None or manifest is None:
        click.echo(ctx.get_usage(), err=True)
        ctx.exit(1)

    setup_logging("DEBUG" if verbose else None)

    run = run_audit(requirements, manifest, lockfile)
    if run.load.error is not None:
        click.echo(f"Error: {run.load.error}", err=True)
        sys.exit(1)

    if as_json:
        report = AuditReport.from_results(run.results, fail_on_mismatch=fail_on_mismatch)
        click.echo(report.model_dump_json(indent=2))
    else:
        click.echo(render_text(run.results))

    sys.exit(exit_code(run.results, fail_on_mismatch=fail_on_mismatch))


if __name__ == "__main__":
    main()
