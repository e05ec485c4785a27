"""Tests for the scenario test data store and repository loading."""
import json
import tempfile
from pathlib import Path

import pytest

from automation_suite.data_store import TestDataStore, deep_merge, get_path, load_repository


def test_set_and_get_field():
    """Test storing and reading a field."""
    store = TestDataStore()
    store.set_field("orderId", "12345")
    assert store.get_field("orderId") == "12345"
    assert store.has_field("orderId")
    assert store.get_field("missing") is None


def test_fields_are_isolated_per_store():
    """Test that two stores never share fields."""
    shared = {"Users": {"admin": "a"}}
    first = TestDataStore(data=shared)
    second = TestDataStore(data=shared)
    first.set_field("token", "abc")
    assert second.get_field("token") is None
    assert second.get_data("Users.admin") == "a"


def test_dotted_paths_and_list_indexes():
    """Test nested lookups."""
    data = {"Configuration": {"Items": ["a", "b"]}, "flat.key": 1}
    assert get_path(data, "Configuration.Items.1") == "b"
    assert get_path(data, "flat.key") == 1
    assert get_path(data, "Configuration.Missing") is None


def test_set_field_rejects_empty_key():
    """Test that an empty key is refused."""
    with pytest.raises(ValueError):
        TestDataStore().set_field("", "x")


def test_nested_write_replaces_scalar():
    """Test that writing below a scalar field replaces it with a dict."""
    store = TestDataStore()
    store.set_field("order", "A-1")
    store.set_field("order.id", "42")
    assert store.get_field("order") == {"id": "42"}
    store.set_field("order", "B-2")
    assert store.get_field("order") == "B-2"
    assert store.get_field("order.id") is None


def test_fields_snapshot_is_a_copy():
    """Test that fields() cannot be used to mutate the store."""
    store = TestDataStore()
    store.set_field("list", [1])
    store.fields()["list"].append(2)
    assert store.get_field("list") == [1]


def test_deep_merge_nested():
    """Test merging nested mappings."""
    merged = deep_merge({"a": {"x": 1}}, {"a": {"y": 2}, "b": 3})
    assert merged == {"a": {"x": 1, "y": 2}, "b": 3}


def test_load_repository_merges_sorted_files():
    """Test that every JSON file under a directory is merged, later files winning."""
    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)
        (root / "nested").mkdir()
        (root / "a.json").write_text(json.dumps({"Users": {"admin": "one"}, "keep": 1}))
        (root / "nested" / "b.json").write_text(json.dumps({"Users": {"admin": "two"}}))
        repo = load_repository(root)
    assert repo == {"Users": {"admin": "two"}, "keep": 1}


def test_load_repository_missing_dir_is_empty():
    """Test that a missing directory yields an empty repository."""
    assert load_repository("/nonexistent/testdata") == {}


def test_load_repository_rejects_non_object():
    """Test that a JSON array at top level is an error."""
    with tempfile.TemporaryDirectory() as tmp:
        (Path(tmp) / "bad.json").write_text("[1, 2]")
        with pytest.raises(ValueError):
            load_repository(tmp)
