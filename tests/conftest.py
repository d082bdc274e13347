"""Shared fixtures for keymatch tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import pytest

from keymatch.filter import PathFilter
from keymatch.keypath import KeyPath, make_index


def _children(node: Any) -> list[tuple[str, Any]]:
    """Return ``(key, child)`` pairs: dict entries are names, list items indices."""
    if isinstance(node, dict):
        return list(node.items())
    if isinstance(node, list):
        return [(make_index(i), child) for i, child in enumerate(node)]
    return []


def _iter_nodes(node: Any, path: KeyPath) -> Iterator[KeyPath]:
    yield path
    for key, child in _children(node):
        yield from _iter_nodes(child, path.extend(key))


def _walk_matching(model: Any, path_filter: PathFilter) -> tuple[list[KeyPath], int]:
    """Walk *model* depth-first, pruning with ``successor_could_match``.

    Returns:
        tuple[list[KeyPath], int]: Matched paths in pre-order and the number
        of nodes visited.
    """
    matched: list[KeyPath] = []
    visited = 0
    stack: list[tuple[KeyPath, Any]] = [(KeyPath.ROOT, model)]
    while stack:
        path, node = stack.pop()
        visited += 1
        if path_filter.matches(path):
            matched.append(path)
        children = [(path.extend(key), child) for key, child in _children(node)]
        # Push in reverse so the first child is popped first
        for child_path, child in reversed(children):
            if path_filter.successor_could_match(child_path):
                stack.append((child_path, child))
    return matched, visited


@pytest.fixture
def sample_model() -> dict[str, Any]:
    """A small debugger-like object model.

    Structure::

        root
        ├── Processes
        │   ├── [0]
        │   │   ├── Threads
        │   │   │   ├── Main
        │   │   │   └── Worker
        │   │   └── Modules
        │   │       ├── [0]
        │   │       └── [1]
        │   └── [1]
        │       ├── Threads
        │       │   └── Main
        │       └── Modules
        └── Available
            ├── [0]
            └── [1]
    """
    return {
        "Processes": [
            {"Threads": {"Main": {}, "Worker": {}}, "Modules": ["libc", "ld"]},
            {"Threads": {"Main": {}}, "Modules": []},
        ],
        "Available": ["a", "b"],
    }


@pytest.fixture
def all_paths(sample_model: dict[str, Any]) -> list[KeyPath]:
    """Every node path of ``sample_model`` in pre-order, root included."""
    return list(_iter_nodes(sample_model, KeyPath.ROOT))


@pytest.fixture
def walk_matching() -> Callable[[Any, PathFilter], tuple[list[KeyPath], int]]:
    return _walk_matching
