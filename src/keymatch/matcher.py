"""Pattern sets: the OR-combination of path patterns."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Final

from keymatch.filter import Align, PathFilter
from keymatch.keypath import WILD_INDEX, WILD_NAME, KeyPath, is_index, is_name
from keymatch.pattern import PathPattern

_WILD_NAME_ONLY: Final[frozenset[str]] = frozenset((WILD_NAME,))
_WILD_INDEX_ONLY: Final[frozenset[str]] = frozenset((WILD_INDEX,))


def _coalesce_wilds(keys: set[str]) -> frozenset[str]:
    """Fold concrete keys into a wildcard token of the same kind.

    Once ``""`` is present every name key is redundant, and likewise
    ``"[]"`` for index keys.
    """
    if WILD_NAME in keys:
        keys = {k for k in keys if not is_name(k)}
        keys.add(WILD_NAME)
    if WILD_INDEX in keys:
        keys = {k for k in keys if not is_index(k)}
        keys.add(WILD_INDEX)
    return frozenset(keys)


class PathMatcher:
    """An immutable set of :class:`PathPattern` read as their logical OR.

    A key path matches when at least one contained pattern matches it. The
    empty set matches nothing. Insertion order is kept for display only;
    equality and hashing use set semantics.
    """

    __slots__ = ("_patterns", "_pattern_set")

    def __init__(self, patterns: Iterable[PathPattern] = ()) -> None:
        self._patterns: tuple[PathPattern, ...] = tuple(dict.fromkeys(patterns))
        self._pattern_set: frozenset[PathPattern] = frozenset(self._patterns)

    @classmethod
    def of_patterns(cls, patterns: Iterable[PathPattern]) -> PathMatcher:
        return cls(patterns)

    @classmethod
    def any_of(cls, filters: Iterable[PathFilter]) -> PathMatcher:
        """Union the pattern sets of *filters* into one matcher."""
        return cls(p for f in filters for p in f.get_patterns())

    @classmethod
    def any(cls, *filters: PathFilter) -> PathMatcher:
        return cls.any_of(filters)

    def __repr__(self) -> str:
        if not self._patterns:
            return "<PathMatcher>"
        body = "\n  ".join(str(p) for p in self._patterns)
        return f"<PathMatcher\n  {body}\n>"

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if not isinstance(other, PathMatcher):
            return NotImplemented
        return self._pattern_set == other._pattern_set

    def __hash__(self) -> int:
        return hash(self._pattern_set)

    def __len__(self) -> int:
        return len(self._patterns)

    def __or__(self, other: PathFilter) -> PathMatcher:
        return self.or_(other)

    def or_(self, other: PathFilter) -> PathMatcher:
        return PathMatcher((*self._patterns, *other.get_patterns()))

    # TODO: index patterns by position (a trie) once matchers hold many patterns.
    def _any_pattern(self, pred: Callable[[PathPattern], bool]) -> bool:
        return any(pred(p) for p in self._patterns)

    def matches(self, path: KeyPath) -> bool:
        return self._any_pattern(lambda p: p.matches(path))

    def successor_could_match(self, path: KeyPath, strict: bool = False) -> bool:
        return self._any_pattern(lambda p: p.successor_could_match(path, strict))

    def ancestor_matches(self, path: KeyPath, strict: bool = False) -> bool:
        return self._any_pattern(lambda p: p.ancestor_matches(path, strict))

    def ancestor_could_match_right(self, path: KeyPath, strict: bool = False) -> bool:
        return self._any_pattern(lambda p: p.ancestor_could_match_right(path, strict))

    def get_singleton_path(self) -> KeyPath | None:
        """Return the single denoted path, if this holds exactly one pattern."""
        if len(self._patterns) != 1:
            return None
        return self._patterns[0].get_singleton_path()

    def get_singleton_pattern(self) -> PathPattern | None:
        if len(self._patterns) != 1:
            return None
        return self._patterns[0]

    def get_patterns(self) -> frozenset[PathPattern]:
        return self._pattern_set

    def is_none(self) -> bool:
        return not self._patterns

    def get_next_keys(self, path: KeyPath) -> frozenset[str]:
        """Return the coalesced union of every pattern's next keys."""
        result: set[str] = set()
        for pattern in self._patterns:
            result.update(pattern.get_next_keys(path))
        return _coalesce_wilds(result)

    def get_next_names(self, path: KeyPath) -> frozenset[str]:
        result: set[str] = set()
        for pattern in self._patterns:
            result.update(pattern.get_next_names(path))
            if WILD_NAME in result:
                return _WILD_NAME_ONLY
        return frozenset(result)

    def get_next_indices(self, path: KeyPath) -> frozenset[str]:
        result: set[str] = set()
        for pattern in self._patterns:
            result.update(pattern.get_next_indices(path))
            if WILD_INDEX in result:
                return _WILD_INDEX_ONLY
        return frozenset(result)

    def get_prev_keys(self, path: KeyPath) -> frozenset[str]:
        """Return the coalesced union of every pattern's previous keys."""
        result: set[str] = set()
        for pattern in self._patterns:
            result.update(pattern.get_prev_keys(path))
        return _coalesce_wilds(result)

    def apply_keys(self, align: Align, keys: Sequence[str]) -> PathMatcher:
        """Substitute *keys* into every pattern's wildcards.

        See :meth:`PathPattern.apply_keys`. Patterns that become equal
        collapse, so the result never holds more patterns than this one.
        """
        keys = tuple(keys)
        return PathMatcher(p.apply_keys(align, keys) for p in self._patterns)

    def apply_int_keys(self, align: Align, *keys: int) -> PathMatcher:
        return self.apply_keys(align, [str(k) for k in keys])

    def remove_right(self, count: int) -> PathMatcher:
        """Drop the last *count* positions from every pattern.

        Patterns shorter than *count* contribute nothing.
        """
        result: set[PathPattern] = set()
        for pattern in self._patterns:
            pattern.do_remove_right(count, result)
        return PathMatcher(result)


NONE: Final[PathMatcher] = PathMatcher()
