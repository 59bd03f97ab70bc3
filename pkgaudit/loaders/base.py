"""Shared file readers for the input loaders."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pkgaudit.exceptions import InputParseError, InputReadError


def read_text(path: str | Path) -> str:
    """Read a whole file as UTF-8 text, tolerating a leading BOM."""
    try:
        return Path(path).read_text(encoding="utf-8-sig")
    except FileNotFoundError:
        raise InputReadError(str(path), "no such file") from None
    except IsADirectoryError:
        raise InputReadError(str(path), "is a directory") from None
    except (OSError, UnicodeDecodeError) as exc:
        raise InputReadError(str(path), str(exc)) from exc


def read_json_object(path: str | Path) -> dict[str, Any]:
    """Read a JSON file whose top level must be an object."""
    content = read_text(path)
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise InputParseError(str(path), f"invalid JSON ({exc})") from exc
    except RecursionError as exc:
        raise InputParseError(str(path), "invalid JSON (nested too deeply)") from exc
    if not isinstance(data, dict):
        raise InputParseError(
            str(path), f"expected a JSON object, got {type(data).__name__}"
        )
    return data
