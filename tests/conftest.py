"""Shared pytest fixtures for pkgaudit tests."""

import json

import pytest


@pytest.fixture
def write_file(tmp_path):
    """Write ``content`` (str, or dict/list dumped as JSON) under tmp_path."""

    def _write(name, content):
        path = tmp_path / name
        if not isinstance(content, str):
            content = json.dumps(content)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
