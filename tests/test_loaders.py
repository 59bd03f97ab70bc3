"""Tests for the requirements, manifest and lockfile loaders."""

from __future__ import annotations

import pytest

from pkgaudit.exceptions import InputParseError, InputReadError
from pkgaudit.loaders import (
    load_lockfile,
    load_manifest,
    load_requirements,
    merge_dependency_groups,
)
from pkgaudit.loaders.package_lock import direct_package_name, parse_lockfile
from pkgaudit.loaders.requirements_list import parse_requirements
from pkgaudit.models import Requirement

# ── Requirements list ────────────────────────────────────────────────────


class TestRequirementsList:
    def test_names_and_constraints(self):
        content = "left-pad\n  react , ^17.0.0 \n"
        assert parse_requirements(content) == [
            Requirement("left-pad"),
            Requirement("react", "^17.0.0"),
        ]

    def test_blank_and_comment_lines_skipped(self):
        content = "\n   \n# header\n   # indented comment\nlodash\n"
        assert parse_requirements(content) == [Requirement("lodash")]

    def test_splits_on_first_comma_only(self):
        [req] = parse_requirements("foo,1.x,extra\n")
        assert req == Requirement("foo", "1.x,extra")

    def test_trailing_comma_means_no_constraint(self):
        [req] = parse_requirements("lodash,\n")
        assert req.version_constraint is None

    def test_empty_name_kept(self):
        [req] = parse_requirements(",1.0.0\n")
        assert req == Requirement("", "1.0.0")

    def test_crlf_line_endings(self):
        assert parse_requirements("a\r\nb,^1.0.0\r\n") == [
            Requirement("a"),
            Requirement("b", "^1.0.0"),
        ]

    def test_load_strips_bom(self, tmp_path):
        path = tmp_path / "packages.csv"
        path.write_text("\ufeffreact\n", encoding="utf-8")
        assert load_requirements(path) == [Requirement("react")]

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputReadError) as exc_info:
            load_requirements(tmp_path / "nope.csv")
        assert "no such file" in str(exc_info.value)

    def test_directory_is_unreadable(self, tmp_path):
        with pytest.raises(InputReadError):
            load_requirements(tmp_path)


# ── Manifest ─────────────────────────────────────────────────────────────


class TestManifest:
    def test_merges_all_groups(self, write_file):
        path = write_file(
            "package.json",
            {
                "name": "app",
                "dependencies": {"react": "^18.0.0"},
                "devDependencies": {"jest": "^29.0.0"},
                "peerDependencies": {"react-dom": "^18.0.0"},
                "optionalDependencies": {"fsevents": "^2.3.0"},
            },
        )
        assert load_manifest(path) == {
            "react": "^18.0.0",
            "jest": "^29.0.0",
            "react-dom": "^18.0.0",
            "fsevents": "^2.3.0",
        }

    def test_later_groups_take_precedence(self, write_file):
        path = write_file(
            "package.json",
            {
                "dependencies": {"a": "1.0.0", "b": "1.0.0"},
                "devDependencies": {"a": "2.0.0"},
                "peerDependencies": {"a": "3.0.0", "b": "3.0.0"},
                "optionalDependencies": {"a": "4.0.0"},
            },
        )
        assert load_manifest(path) == {"a": "4.0.0", "b": "3.0.0"}

    def test_no_groups(self, write_file):
        assert load_manifest(write_file("package.json", {"name": "empty"})) == {}

    def test_non_object_group_ignored(self, write_file):
        path = write_file(
            "package.json",
            {"dependencies": ["react"], "devDependencies": {"jest": "29.0.0"}},
        )
        assert load_manifest(path) == {"jest": "29.0.0"}

    def test_malformed_json(self, write_file):
        with pytest.raises(InputParseError) as exc_info:
            load_manifest(write_file("package.json", "{not json"))
        assert "invalid JSON" in str(exc_info.value)

    def test_deeply_nested_json(self, write_file):
        path = write_file("package.json", "[" * 100000 + "]" * 100000)
        with pytest.raises(InputParseError) as exc_info:
            load_manifest(path)
        assert "nested too deeply" in str(exc_info.value)

    def test_top_level_not_object(self, write_file):
        with pytest.raises(InputParseError):
            load_manifest(write_file("package.json", ["react"]))

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputReadError):
            load_manifest(tmp_path / "package.json")

    def test_merge_order(self):
        merged = merge_dependency_groups([{"x": "1"}, {"y": "2"}, {"x": "3"}])
        assert merged == {"x": "3", "y": "2"}


# ── Lockfile ─────────────────────────────────────────────────────────────


class TestLockfile:
    def test_only_direct_entries(self, write_file):
        path = write_file(
            "package-lock.json",
            {
                "lockfileVersion": 3,
                "packages": {
                    "": {"name": "app", "version": "1.0.0"},
                    "node_modules/react": {"version": "18.2.0"},
                    "node_modules/react/node_modules/loose-envify": {"version": "1.4.0"},
                    "node_modules/@babel/core": {"version": "7.23.0"},
                    "packages/workspace-a": {"version": "0.1.0"},
                },
            },
        )
        assert load_lockfile(path) == {"react": "18.2.0", "@babel/core": "7.23.0"}

    def test_entries_without_version_skipped(self):
        data = {
            "packages": {
                "node_modules/linked": {"resolved": "../linked", "link": True},
                "node_modules/empty": {"version": ""},
                "node_modules/lodash": {"version": "4.17.21"},
            }
        }
        assert parse_lockfile(data) == {"lodash": "4.17.21"}

    def test_missing_packages_key(self):
        assert parse_lockfile({"lockfileVersion": 1, "dependencies": {}}) == {}

    def test_malformed_json(self, write_file):
        with pytest.raises(InputParseError):
            load_lockfile(write_file("package-lock.json", "[1, 2"))

    @pytest.mark.parametrize(
        "install_path, expected",
        [
            ("node_modules/react", "react"),
            ("node_modules/@scope/pkg", "@scope/pkg"),
            ("node_modules/a/node_modules/b", None),
            ("node_modules/@scope/pkg/node_modules/c", None),
            ("", None),
            ("packages/app", None),
        ],
    )
    def test_direct_package_name(self, install_path, expected):
        assert direct_package_name(install_path) == expected
