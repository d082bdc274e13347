"""Fixed-length key path patterns with per-position wildcards."""

from __future__ import annotations

import enum
import logging
from collections.abc import MutableSet, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from keymatch import PathMatchError
from keymatch.filter import Align, PathFilter
from keymatch.keypath import (
    WILD_INDEX,
    WILD_NAME,
    KeyPath,
    is_index,
    is_name,
    make_index,
)

if TYPE_CHECKING:
    from keymatch.matcher import PathMatcher

logger = logging.getLogger(__name__)

_EMPTY: frozenset[str] = frozenset()


class MatcherKind(enum.Enum):
    """The closed set of things a single pattern position can match."""

    LITERAL = "literal"
    ANY_NAME = "any_name"
    ANY_INDEX = "any_index"


@dataclass(frozen=True, slots=True)
class KeyMatcher:
    """One position of a :class:`PathPattern`.

    Attributes:
        kind: Which matcher this position is.
        key: The literal key, or the wildcard token for wildcard kinds.
    """

    kind: MatcherKind
    key: str

    def __post_init__(self) -> None:
        if self.kind is MatcherKind.ANY_NAME and self.key != WILD_NAME:
            raise PathMatchError(f"any-name matcher must carry '', got {self.key!r}")
        if self.kind is MatcherKind.ANY_INDEX and self.key != WILD_INDEX:
            raise PathMatchError(f"any-index matcher must carry '[]', got {self.key!r}")
        if self.kind is MatcherKind.LITERAL and self.key in (WILD_NAME, WILD_INDEX):
            raise PathMatchError(f"literal matcher cannot carry wildcard token {self.key!r}")

    @classmethod
    def from_token(cls, token: str) -> KeyMatcher:
        """Classify a serialized token: ``""`` and ``"[]"`` are wildcards."""
        if token == WILD_NAME:
            return cls(MatcherKind.ANY_NAME, WILD_NAME)
        if token == WILD_INDEX:
            return cls(MatcherKind.ANY_INDEX, WILD_INDEX)
        return cls(MatcherKind.LITERAL, token)

    @property
    def token(self) -> str:
        return self.key

    @property
    def is_wildcard(self) -> bool:
        return self.kind is not MatcherKind.LITERAL

    def accepts(self, key: str) -> bool:
        if self.kind is MatcherKind.LITERAL:
            return key == self.key
        if self.kind is MatcherKind.ANY_NAME:
            return is_name(key)
        if self.kind is MatcherKind.ANY_INDEX:
            return is_index(key)
        raise AssertionError(f"unhandled matcher kind {self.kind!r}")


@dataclass(frozen=True, slots=True, repr=False)
class PathPattern:
    """A fixed-length path pattern.

    Each position holds a :class:`KeyMatcher`. A pattern of length *n* only
    ever matches key paths of length *n*; there is no any-depth wildcard.

    Attributes:
        matchers: Per-position matchers from the root downwards.
    """

    matchers: tuple[KeyMatcher, ...] = ()

    @classmethod
    def of(cls, *tokens: str) -> PathPattern:
        """Build a pattern from serialized tokens.

        ``""`` matches any name key and ``"[]"`` any index key; every other
        token matches itself literally.
        """
        return cls(tuple(KeyMatcher.from_token(t) for t in tokens))

    @classmethod
    def from_path(cls, path: KeyPath) -> PathPattern:
        return cls.of(*path)

    def __len__(self) -> int:
        return len(self.matchers)

    def __str__(self) -> str:
        return str(self.as_path())

    def __repr__(self) -> str:
        tokens = ", ".join(repr(m.token) for m in self.matchers)
        return f"PathPattern.of({tokens})"

    def __or__(self, other: PathFilter) -> PathMatcher:
        return self.or_(other)

    def as_path(self) -> KeyPath:
        """Return the serialized tokens as a key path."""
        return KeyPath(tuple(m.token for m in self.matchers))

    def count_wildcards(self) -> int:
        return sum(1 for m in self.matchers if m.is_wildcard)

    def _matches_up_to(self, path: KeyPath, length: int) -> bool:
        for i in range(length):
            if not self.matchers[i].accepts(path[i]):
                return False
        return True

    def _matches_back_to(self, path: KeyPath, length: int) -> bool:
        # Right-anchored: the last key of path lines up with the last matcher.
        pattern_max = len(self.matchers) - 1
        path_max = len(path) - 1
        for i in range(length):
            if not self.matchers[pattern_max - i].accepts(path[path_max - i]):
                return False
        return True

    def matches(self, path: KeyPath) -> bool:
        if len(path) != len(self.matchers):
            return False
        return self._matches_up_to(path, len(path))

    def successor_could_match(self, path: KeyPath, strict: bool = False) -> bool:
        """Return whether *path* or one of its descendants could match.

        Args:
            path: Candidate node path.
            strict: Require a proper descendant, excluding *path* itself.

        Returns:
            bool: ``False`` means the subtree rooted at *path* can be pruned.
        """
        if len(path) > len(self.matchers):
            return False
        if strict and len(path) == len(self.matchers):
            return False
        return self._matches_up_to(path, len(path))

    def ancestor_matches(self, path: KeyPath, strict: bool = False) -> bool:
        """Return whether the ancestor of *path* at this pattern's depth matches.

        Args:
            path: Candidate node path.
            strict: Require a proper ancestor, excluding *path* itself.
        """
        if len(path) < len(self.matchers):
            return False
        if strict and len(path) == len(self.matchers):
            return False
        return self._matches_up_to(path, len(self.matchers))

    def ancestor_could_match_right(self, path: KeyPath, strict: bool = False) -> bool:
        """Return whether *path* could be the tail of a match.

        *path* is read right-anchored, as the relative path from some
        ancestor down to a node. It is accepted when every key agrees with
        the matcher at the same distance from the pattern's right end, so
        prepending further keys might still complete a match.

        Args:
            path: Relative path, aligned to the right end of the pattern.
            strict: Require at least one more key to be prepended.
        """
        if len(path) > len(self.matchers):
            return False
        if strict and len(path) == len(self.matchers):
            return False
        return self._matches_back_to(path, len(path))

    def get_singleton_path(self) -> KeyPath | None:
        """Return the one path this pattern denotes, or ``None`` if wildcarded."""
        if any(m.is_wildcard for m in self.matchers):
            return None
        return self.as_path()

    def get_singleton_pattern(self) -> PathPattern:
        return self

    def get_patterns(self) -> frozenset[PathPattern]:
        return frozenset((self,))

    def is_none(self) -> bool:
        return False

    def get_next_keys(self, path: KeyPath) -> frozenset[str]:
        """Return the token acceptable right after *path*.

        Returns:
            frozenset[str]: A literal key or a wildcard token, or an empty
            set when *path* is too long or does not match this pattern's
            prefix.
        """
        if len(path) >= len(self.matchers):
            return _EMPTY
        if not self._matches_up_to(path, len(path)):
            return _EMPTY
        return frozenset((self.matchers[len(path)].token,))

    def get_next_names(self, path: KeyPath) -> frozenset[str]:
        return frozenset(k for k in self.get_next_keys(path) if is_name(k))

    def get_next_indices(self, path: KeyPath) -> frozenset[str]:
        return frozenset(k for k in self.get_next_keys(path) if is_index(k))

    def get_prev_keys(self, path: KeyPath) -> frozenset[str]:
        """Return the token acceptable right before the right-anchored *path*."""
        if len(path) >= len(self.matchers):
            return _EMPTY
        if not self._matches_back_to(path, len(path)):
            return _EMPTY
        return frozenset((self.matchers[len(self.matchers) - 1 - len(path)].token,))

    def match_keys(self, path: KeyPath, match_length: bool = True) -> tuple[str, ...] | None:
        """Return the keys of *path* that fill this pattern's wildcards.

        Args:
            path: Path to match.
            match_length: When ``False``, a longer path is matched on its
                prefix of this pattern's length.

        Returns:
            tuple[str, ...] | None: Keys at wildcard positions in order, or
            ``None`` when *path* does not match.
        """
        if len(path) < len(self.matchers):
            return None
        if match_length and len(path) != len(self.matchers):
            return None
        result: list[str] = []
        for matcher, key in zip(self.matchers, path):
            if not matcher.accepts(key):
                return None
            if matcher.is_wildcard:
                result.append(key)
        return tuple(result)

    def apply_keys(self, align: Align, keys: Sequence[str]) -> PathPattern:
        """Replace wildcards with the given keys.

        Pattern positions and *keys* are both walked from the end selected
        by *align*. Each wildcard consumes the next key while any remain;
        wildcards left over stay wildcards and surplus keys are ignored.
        Index wildcards receive the key in index form.

        Raises:
            PathMatchError: If ``align`` is not an :class:`Align`.
        """
        if not isinstance(align, Align):
            raise PathMatchError(f"align must be an Align, got {align!r}")
        remaining = align.order(tuple(keys))
        result: list[KeyMatcher] = []
        for matcher in align.order(self.matchers):
            if not matcher.is_wildcard:
                result.append(matcher)
                continue
            key = next(remaining, None)
            if key is None:
                result.append(matcher)
            elif matcher.kind is MatcherKind.ANY_INDEX:
                result.append(KeyMatcher.from_token(make_index(key)))
            else:
                result.append(KeyMatcher.from_token(key))
        if align is Align.RIGHT:
            result.reverse()
        return PathPattern(tuple(result))

    def apply_int_keys(self, align: Align, *keys: int) -> PathPattern:
        return self.apply_keys(align, [str(k) for k in keys])

    def do_remove_right(self, count: int, into: MutableSet[PathPattern]) -> None:
        """Add this pattern minus its last *count* positions to *into*.

        Nothing is added when the pattern is shorter than *count*.

        Raises:
            PathMatchError: If ``count`` is negative.
        """
        if count < 0:
            raise PathMatchError(f"count must be non-negative, got {count}")
        if count > len(self.matchers):
            logger.debug("Pattern %r shorter than %d; dropped", self, count)
            return
        into.add(PathPattern(self.matchers[: len(self.matchers) - count]))

    def remove_right(self, count: int) -> PathMatcher:
        from keymatch.matcher import PathMatcher

        result: set[PathPattern] = set()
        self.do_remove_right(count, result)
        return PathMatcher.of_patterns(result)

    def or_(self, other: PathFilter) -> PathMatcher:
        from keymatch.matcher import PathMatcher

        return PathMatcher.any(self, other)
