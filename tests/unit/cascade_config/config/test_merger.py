"""Unit tests for ConfigMerger."""
import asyncio
import copy
import re
from datetime import datetime

import pytest

from src.cascade_config.config.merger import ConfigMerger, extend_deep
from src.cascade_config.exceptions.config import ConfigMergeError


def test_merge_empty_source_leaves_destination_unchanged():
    """Should be a no-op for an empty source."""
    into = {"a": {"b": [1, 2]}, "c": "x"}
    before = copy.deepcopy(into)

    extend_deep(into, {})

    assert into == before


def test_merge_none_source_is_noop():
    """Should accept None as an empty source."""
    into = {"a": 1}

    assert extend_deep(into, None) == {"a": 1}


def test_merge_nested_mappings_recursively():
    """Should union nested mappings instead of replacing them."""
    into = {"a": {"y": 2}}

    extend_deep(into, {"a": {"x": 1}})

    assert into == {"a": {"x": 1, "y": 2}}


def test_merge_list_replaces_mapping():
    """Should replace a mapping wholesale when the source is a list."""
    into = {"a": {"y": 2}}

    extend_deep(into, {"a": [1, 2]})

    assert into == {"a": [1, 2]}


def test_merge_mapping_replaces_scalar():
    """Should replace a scalar destination with a cloned mapping."""
    source = {"a": {"x": 1}}
    into = {"a": "flat"}

    extend_deep(into, source)

    assert into == {"a": {"x": 1}}
    assert into["a"] is not source["a"]


def test_merge_lists_are_replaced_not_concatenated():
    """Should override lists completely."""
    into = {"sources": ["arxiv", "kaggle"]}

    extend_deep(into, {"sources": ["web"]})

    assert into == {"sources": ["web"]}


def test_merge_clones_source_containers():
    """Should not alias source structures into the destination."""
    source = {"hosts": [{"name": "a"}]}
    into = {}

    extend_deep(into, source)
    into["hosts"][0]["name"] = "changed"

    assert source == {"hosts": [{"name": "a"}]}


def test_merge_scalar_overrides():
    """Should override scalars by value, including None."""
    into = {"port": 3000, "debug": True}

    extend_deep(into, {"port": 8080, "debug": None})

    assert into == {"port": 8080, "debug": None}


def test_merge_assigns_dates_and_patterns_by_reference():
    """Should keep atomic values as the same objects."""
    when = datetime(2024, 1, 1)
    pattern = re.compile(r"\d+")
    into = {"when": {"nested": True}}

    extend_deep(into, {"when": when, "pattern": pattern})

    assert into["when"] is when
    assert into["pattern"] is pattern


@pytest.mark.asyncio
async def test_merge_assigns_pending_computation_by_reference():
    """Should copy futures by identity even over an existing mapping."""
    future = asyncio.get_running_loop().create_future()
    into = {"secret": {"old": 1}}

    extend_deep(into, {"secret": future})

    assert into["secret"] is future


def test_merge_returns_destination():
    """Should return the mutated destination object."""
    into = {}

    assert extend_deep(into, {"a": 1}) is into


def test_merge_rejects_non_mapping_source():
    """Should raise ConfigMergeError for non-mapping sources."""
    with pytest.raises(ConfigMergeError, match="Cannot merge list"):
        extend_deep({}, [1, 2])


def test_merge_multiple_right_wins():
    """Should merge left to right without touching the inputs."""
    merger = ConfigMerger()
    base = {"db": {"host": "localhost", "port": 5432}}
    env = {"db": {"host": "prod-db"}}
    local = {"db": {"port": 6543}}

    result = merger.merge_multiple(base, env, None, local)

    assert result == {"db": {"host": "prod-db", "port": 6543}}
    assert base == {"db": {"host": "localhost", "port": 5432}}


def test_merge_multiple_without_configs():
    """Should return an empty tree."""
    assert ConfigMerger().merge_multiple() == {}
