"""Key paths and syntactic key classification (name vs. index keys)."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import ClassVar, Final, overload

from keymatch import PathMatchError

WILD_NAME: Final[str] = ""
WILD_INDEX: Final[str] = "[]"


def is_index(key: str) -> bool:
    """Return whether *key* is written in bracketed index form, e.g. ``[3]``."""
    return key.startswith("[") and key.endswith("]")


def is_name(key: str) -> bool:
    """Return whether *key* is a name key (anything not in index form)."""
    return not is_index(key)


def make_index(value: object) -> str:
    """Wrap *value* in index brackets.

    Args:
        value: Index value, typically an ``int`` or its string form.

    Returns:
        str: The index key. A string already in index form is returned as is.
    """
    text = str(value)
    if is_index(text):
        return text
    return f"[{text}]"


def parse_index(key: str) -> str:
    """Return the contents of an index key without its brackets.

    Raises:
        PathMatchError: If ``key`` is a name key.
    """
    if not is_index(key):
        raise PathMatchError(f"'{key}' is not an index key")
    return key[1:-1]


@dataclass(frozen=True, slots=True)
class KeyPath:
    """An immutable sequence of keys locating a node in a tree.

    Attributes:
        keys: Keys from the root downwards. ``()`` is the root itself.
    """

    ROOT: ClassVar[KeyPath]

    keys: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if isinstance(self.keys, str):
            raise TypeError("key path keys must be given as a sequence, not a str")
        keys = tuple(self.keys)
        for key in keys:
            if not isinstance(key, str):
                raise TypeError(f"key path keys must be str, got {type(key).__name__}")
        object.__setattr__(self, "keys", keys)

    @classmethod
    def of(cls, *keys: str) -> KeyPath:
        return cls(keys)

    def __len__(self) -> int:
        return len(self.keys)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys)

    @overload
    def __getitem__(self, item: int) -> str: ...

    @overload
    def __getitem__(self, item: slice) -> KeyPath: ...

    def __getitem__(self, item: int | slice) -> str | KeyPath:
        if isinstance(item, slice):
            return KeyPath(self.keys[item])
        return self.keys[item]

    def __str__(self) -> str:
        parts: list[str] = []
        for key in self.keys:
            if parts and is_name(key):
                parts.append(".")
            parts.append(key)
        return "".join(parts)

    def key(self, i: int) -> str:
        return self.keys[i]

    def last(self) -> str | None:
        """Return the final key, or ``None`` for the root path."""
        return self.keys[-1] if self.keys else None

    def extend(self, *keys: str) -> KeyPath:
        return KeyPath(self.keys + keys)

    def parent(self, count: int = 1) -> KeyPath | None:
        """Return the ancestor *count* levels up.

        Args:
            count: Number of trailing keys to drop.

        Returns:
            KeyPath | None: The ancestor, or ``None`` when this path has
            fewer than ``count`` keys.

        Raises:
            PathMatchError: If ``count`` is negative.
        """
        if count < 0:
            raise PathMatchError(f"count must be non-negative, got {count}")
        if count > len(self.keys):
            return None
        return KeyPath(self.keys[: len(self.keys) - count])

    def is_ancestor(self, other: KeyPath, strict: bool = False) -> bool:
        """Return whether this path is a prefix of *other*.

        With ``strict`` the two paths must also differ.
        """
        if len(self.keys) > len(other.keys):
            return False
        if strict and len(self.keys) == len(other.keys):
            return False
        return other.keys[: len(self.keys)] == self.keys


KeyPath.ROOT = KeyPath()
