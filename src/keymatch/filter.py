"""The path filter contract shared by single patterns and pattern sets."""

from __future__ import annotations

import enum
from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING, AbstractSet, Protocol, TypeVar

from keymatch.keypath import KeyPath

if TYPE_CHECKING:
    from keymatch.pattern import PathPattern

_T = TypeVar("_T")


class Align(enum.Enum):
    """Which end of a pattern anchors key substitution."""

    LEFT = "left"
    RIGHT = "right"

    def order(self, items: Sequence[_T]) -> Iterator[_T]:
        """Yield *items* starting from the anchoring end."""
        if self is Align.LEFT:
            return iter(items)
        return reversed(items)


class PathFilter(Protocol):
    """Protocol for key path filters.

    Implemented by :class:`~keymatch.pattern.PathPattern` and
    :class:`~keymatch.matcher.PathMatcher`. Every operation is a pure query
    or returns a new filter; none mutates the receiver.
    """

    def matches(self, path: KeyPath) -> bool: ...

    def successor_could_match(self, path: KeyPath, strict: bool = False) -> bool: ...

    def ancestor_matches(self, path: KeyPath, strict: bool = False) -> bool: ...

    def ancestor_could_match_right(self, path: KeyPath, strict: bool = False) -> bool: ...

    def get_singleton_path(self) -> KeyPath | None: ...

    def get_singleton_pattern(self) -> PathPattern | None: ...

    def get_patterns(self) -> AbstractSet[PathPattern]: ...

    def get_next_keys(self, path: KeyPath) -> frozenset[str]: ...

    def get_next_names(self, path: KeyPath) -> frozenset[str]: ...

    def get_next_indices(self, path: KeyPath) -> frozenset[str]: ...

    def get_prev_keys(self, path: KeyPath) -> frozenset[str]: ...

    def is_none(self) -> bool: ...

    def apply_keys(self, align: Align, keys: Sequence[str]) -> PathFilter: ...

    def remove_right(self, count: int) -> PathFilter: ...

    def or_(self, other: PathFilter) -> PathFilter: ...
