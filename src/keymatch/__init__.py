"""keymatch — wildcard pattern matching over hierarchical key paths."""

__version__ = "0.1.0"


class PathMatchError(ValueError):
    """Invalid argument passed to a key path or pattern operation.

    Raised for malformed inputs such as a negative ``remove_right`` count
    or an index key that is not in bracketed form. Matching queries
    themselves never raise.
    """
