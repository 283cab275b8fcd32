"""Lifecycle hook dispatcher.

Hosts announce lifecycle points (``construct``, ``afterDestroy``, ...) by
calling :meth:`Hooks.run`; extensions subscribe with :meth:`Hooks.add`.
Subscriptions are either global (fired for every host) or local to one
host. Every callback is invoked as ``callback(host, *args)``.

Example
-------
::

    hooks = Hooks.get_singleton()

    def on_construct(host):
        print("constructed", host)

    hooks.add("construct", on_construct)
    hooks.run(my_host, "construct")
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar

from hostplug.errors import InvalidArgumentError, UnknownHookError
from hostplug.identity import IdentityMap

logger = logging.getLogger(__name__)

#: Hook names every :class:`Hooks` instance knows about.
REGISTERED_HOOKS: tuple[str, ...] = (
    "construct",
    "init",
    "afterInit",
    "beforeDestroy",
    "afterDestroy",
)

HookBuckets = dict[str, list["HookCallback"]]


@dataclass(eq=False)
class HookCallback:
    """A subscribed callback.

    Attributes
    ----------
    callback:
        Called as ``callback(host, *args)``.
    once:
        Unsubscribe automatically before the first call.
    removed:
        Set when unsubscribed, so an in-flight run skips it.
    """

    callback: Callable[..., Any]
    once: bool = False
    removed: bool = False

    def __call__(self, host: object, *args: Any) -> Any:
        return self.callback(host, *args)


class Hooks:
    """Named lifecycle hook dispatcher with global and per-host subscriptions."""

    _singleton: ClassVar[Hooks | None] = None

    def __init__(self) -> None:
        self._global: HookBuckets = {}
        self._local: IdentityMap[HookBuckets] = IdentityMap()
        self._custom: list[str] = []

    @classmethod
    def get_singleton(cls) -> Hooks:
        """Return the process-wide dispatcher, creating it on first use."""
        if cls._singleton is None:
            cls._singleton = cls()
        return cls._singleton

    # ------------------------------------------------------------------
    # Hook names
    # ------------------------------------------------------------------

    def register(self, key: str) -> None:
        """Declare a custom hook name so it can be subscribed to and run."""
        if not isinstance(key, str) or not key:
            raise InvalidArgumentError("key", "a non-empty str", key)
        if not self.is_registered(key):
            self._custom.append(key)
            logger.debug("Registered custom hook %r", key)

    def deregister(self, key: str) -> None:
        """Forget a custom hook name and every global subscription to it.

        Built-in hook names cannot be deregistered; doing so is a no-op.
        """
        if key in self._custom:
            self._custom.remove(key)
            self._global.pop(key, None)
            logger.debug("Deregistered custom hook %r", key)

    def is_registered(self, key: str) -> bool:
        """Return whether *key* is a built-in or custom hook name."""
        return key in REGISTERED_HOOKS or key in self._custom

    def get_registered(self) -> list[str]:
        """Return all known hook names, built-ins first."""
        return [*REGISTERED_HOOKS, *self._custom]

    def _check_key(self, key: object) -> None:
        if not isinstance(key, str):
            raise InvalidArgumentError("key", "a str", key)
        if not self.is_registered(key):
            raise UnknownHookError(key)

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------

    def _buckets(self, host: object | None, create: bool) -> HookBuckets | None:
        if host is None:
            return self._global
        if create:
            return self._local.setdefault(host, dict)
        return self._local.get(host)

    def add(
        self,
        key: str,
        callback: Callable[..., Any],
        host: object | None = None,
        *,
        once: bool = False,
    ) -> Hooks:
        """Subscribe *callback* to hook *key*.

        Parameters
        ----------
        key:
            Hook name.
        callback:
            Called as ``callback(host, *args)``.
        host:
            Restrict the subscription to this host. Global when ``None``.
        once:
            Unsubscribe after the first call.

        Returns
        -------
        Hooks
            This dispatcher, for chaining.

        Raises
        ------
        InvalidArgumentError
            If *callback* is not callable.
        UnknownHookError
            If *key* is not a known hook name.
        """
        self._check_key(key)
        if not callable(callback):
            raise InvalidArgumentError("callback", "callable", callback)

        buckets = self._buckets(host, create=True)
        bucket = buckets.setdefault(key, [])
        if any(entry.callback is callback for entry in bucket):
            return self

        bucket.append(HookCallback(callback=callback, once=once))
        logger.debug(
            "Subscribed %s to hook %r (%s)",
            getattr(callback, "__qualname__", repr(callback)),
            key,
            "global" if host is None else "local",
        )
        return self

    def once(
        self, key: str, callback: Callable[..., Any], host: object | None = None
    ) -> Hooks:
        """Subscribe *callback* to run at most once."""
        return self.add(key, callback, host, once=True)

    def remove(
        self, key: str, callback: Callable[..., Any], host: object | None = None
    ) -> bool:
        """Unsubscribe *callback* from *key*. Returns whether it was subscribed."""
        buckets = self._buckets(host, create=False)
        if not buckets or key not in buckets:
            return False

        bucket = buckets[key]
        for entry in bucket:
            if entry.callback is callback:
                entry.removed = True
                bucket.remove(entry)
                return True
        return False

    def has(self, key: str, host: object | None = None) -> bool:
        """Return whether *key* has any subscribers in the given scope."""
        buckets = self._buckets(host, create=False)
        return bool(buckets and buckets.get(key))

    def destroy(self, host: object) -> None:
        """Drop every local subscription held for *host*."""
        self._local.pop(host)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def run(self, host: object, key: str, *args: Any) -> None:
        """Fire hook *key* for *host*.

        Global subscribers run first, then the host's local subscribers,
        each group in subscription order. Callbacks subscribed while the
        hook is running are not called until the next run. Exceptions
        raised by a callback propagate to the caller and stop the run.
        """
        self._check_key(key)

        entries = [(None, entry) for entry in self._global.get(key, ())]
        local = self._local.get(host)
        if local:
            entries.extend((host, entry) for entry in local.get(key, ()))

        for scope, entry in entries:
            if entry.removed:
                continue
            if entry.once:
                self.remove(key, entry.callback, scope)
            entry(host, *args)

    def __repr__(self) -> str:
        subscribed = sum(len(bucket) for bucket in self._global.values())
        return f"Hooks(hooks={len(self.get_registered())}, global_callbacks={subscribed})"
