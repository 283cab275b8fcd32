"""Exception types raised by hostplug.

Every error derives from :class:`HostplugError` so callers can catch the
whole family at once, and additionally from the closest builtin so that
``except TypeError`` / ``except KeyError`` keep working.
"""
from __future__ import annotations


class HostplugError(Exception):
    """Base exception for hostplug errors."""


class InvalidArgumentError(HostplugError, TypeError):
    """Raised when a public function receives an argument of the wrong type."""

    def __init__(self, argument: str, expected: str, value: object) -> None:
        self.argument = argument
        self.expected = expected
        self.value = value
        super().__init__(
            f"Argument {argument!r} must be {expected}, "
            f"got {type(value).__name__}: {value!r}"
        )


class UnknownHookError(HostplugError, KeyError):
    """Raised when a hook name is neither built in nor registered."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(
            f"Hook {key!r} is not registered. "
            "Call Hooks.register() to declare custom hook names first."
        )

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the whole message.
        return str(self.args[0])


class PluginDestroyError(HostplugError, RuntimeError):
    """Raised after teardown when one or more plugins failed to destroy.

    Parameters
    ----------
    failures:
        ``(plugin_name, exception)`` pairs, in destruction order.
    """

    def __init__(self, failures: list[tuple[str, BaseException]]) -> None:
        self.failures = failures
        names = ", ".join(repr(name) for name, _ in failures)
        super().__init__(
            f"{len(failures)} plugin(s) raised during destroy(): {names}"
        )
