"""String helpers shared by the hook dispatcher and the plugin registry."""
from __future__ import annotations


def to_upper_case_first(value: str) -> str:
    """Return *value* with its first character uppercased.

    The rest of the string is left untouched, so ``"fooBar"`` becomes
    ``"FooBar"`` and ``"FOO"`` stays ``"FOO"``.

    Parameters
    ----------
    value:
        The string to normalize. An empty string is returned unchanged.
    """
    return value[:1].upper() + value[1:]
