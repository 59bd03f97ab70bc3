"""Tests for the load -> reconcile pipeline driver."""

from __future__ import annotations

from pkgaudit.exceptions import InputParseError, InputReadError
from pkgaudit.models import Status
from pkgaudit.pipeline import load_inputs, run_audit


class TestLoadInputs:
    def test_success_without_lockfile(self, write_file):
        reqs = write_file("packages.csv", "react\n")
        manifest = write_file("package.json", {"dependencies": {"react": "^18.0.0"}})
        loaded = load_inputs(reqs, manifest)
        assert loaded.ok
        assert loaded.inputs.lock is None

    def test_unreadable_requirements_is_tagged(self, tmp_path, write_file):
        manifest = write_file("package.json", {})
        loaded = load_inputs(tmp_path / "missing.csv", manifest)
        assert not loaded.ok
        assert loaded.inputs is None
        assert isinstance(loaded.error, InputReadError)

    def test_bad_lockfile_is_tagged(self, write_file):
        reqs = write_file("packages.csv", "react\n")
        manifest = write_file("package.json", {})
        lock = write_file("package-lock.json", "{")
        loaded = load_inputs(reqs, manifest, lock)
        assert isinstance(loaded.error, InputParseError)


class TestRunAudit:
    def test_end_to_end(self, write_file):
        reqs = write_file("packages.csv", "left-pad\nreact,^17.0.0\n")
        manifest = write_file("package.json", {"dependencies": {"react": "^18.0.0"}})
        run = run_audit(reqs, manifest)
        assert run.load.ok
        assert [(r.name, r.status) for r in run.results] == [
            ("left-pad", Status.MISSING),
            ("react", Status.MISMATCH),
        ]

    def test_failed_load_has_no_results(self, tmp_path, write_file):
        run = run_audit(tmp_path / "missing.csv", write_file("package.json", {}))
        assert not run.load.ok
        assert run.results == []
