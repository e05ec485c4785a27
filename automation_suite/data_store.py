from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Mapping, Optional

from .config import load_json_file


def get_path(data: Mapping[str, Any], path: str) -> Any:
    """Read a dotted path ("Configuration.Users"); missing segments yield None."""
    if path in data:
        return data[path]
    current: Any = data
    for segment in path.split("."):
        if isinstance(current, Mapping) and segment in current:
            current = current[segment]
        elif isinstance(current, list) and segment.isdigit() and int(segment) < len(current):
            current = current[int(segment)]
        else:
            return None
    return current


def set_path(data: dict[str, Any], path: str, value: Any) -> None:
    """
    Write `value` at a dotted path, creating intermediate dicts.

    The last write wins: a non-dict value sitting on an intermediate segment
    is replaced by a dict, so set "a" then "a.b" leaves {"a": {"b": ...}}.
    """
    segments = path.split(".")
    current = data
    for segment in segments[:-1]:
        nxt = current.get(segment)
        if not isinstance(nxt, dict):
            nxt = {}
            current[segment] = nxt
        current = nxt
    current[segments[-1]] = value


def deep_merge(base: dict[str, Any], incoming: Mapping[str, Any]) -> dict[str, Any]:
    for key, value in incoming.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), dict):
            deep_merge(base[key], value)
        else:
            base[key] = copy.deepcopy(value)
    return base


def load_repository(directory: str | Path) -> dict[str, Any]:
    """
    Deep-merge every *.json file under `directory` (recursive, sorted by path).

    A missing directory yields an empty repository.
    """
    root = Path(directory)
    if not root.exists():
        return {}
    if not root.is_dir():
        raise NotADirectoryError(f"Expected a directory of JSON files: {root}")
    merged: dict[str, Any] = {}
    for json_path in sorted(root.rglob("*.json")):
        deep_merge(merged, load_json_file(json_path))
    return merged


class TestDataStore:
    """
    Scenario-scoped named values plus read-only data and locator repositories.

    Fields set during a scenario live only in this instance; the environment
    hooks create a fresh store per scenario so values cannot leak between
    scenarios. The repositories are shared and never written.
    """

    __test__ = False

    def __init__(
        self,
        *,
        data: Optional[Mapping[str, Any]] = None,
        locators: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self._fields: dict[str, Any] = {}
        self._data: Mapping[str, Any] = data or {}
        self._locators: Mapping[str, Any] = locators or {}

    def set_field(self, key: str, value: Any) -> None:
        if not key:
            raise ValueError("test data key must be a non-empty string")
        set_path(self._fields, key, value)

    def get_field(self, key: str) -> Any:
        return get_path(self._fields, key)

    def has_field(self, key: str) -> bool:
        return self.get_field(key) is not None

    def get_data(self, path: str) -> Any:
        return get_path(self._data, path)

    def get_locator(self, path: str) -> Any:
        return get_path(self._locators, path)

    def fields(self) -> dict[str, Any]:
        return copy.deepcopy(self._fields)
